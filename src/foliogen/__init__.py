"""FolioGen API - AI-assisted portfolio generation."""

__version__ = "0.1.0"
