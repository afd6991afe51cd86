"""In-memory string analysis store with structured and natural-language filtering."""

__version__ = "1.0.0"
