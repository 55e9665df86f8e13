"""syld — Support Your Linux Desktop."""

__version__ = "0.1.0"
