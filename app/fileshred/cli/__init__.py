"""Command-line interface for fileshred."""
