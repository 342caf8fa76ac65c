"""relver: interactive release versioning, tagging and changelog helper."""

__version__ = "0.1.0"
