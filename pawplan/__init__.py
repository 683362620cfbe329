"""Task scheduling, completion and streak derivation for household pet care."""

__version__ = "0.1.0"
