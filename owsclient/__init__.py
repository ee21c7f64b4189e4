"""Client-side request building for OGC Web Services (SOS, CSW)."""

__version__ = "1.2"
