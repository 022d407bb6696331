"""Core infrastructure: application paths, theming, and history state."""
