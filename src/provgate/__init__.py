"""Local development gateway for content-provider modules."""

__version__ = "0.1.0"
