"""fileshred - Secure file deletion.

Overwrites file contents with a configurable byte pattern, obfuscates
file names through repeated renaming, and removes the emptied folder
structure afterwards.
"""

__version__ = "0.3.0"
