"""Extract distinct slides from presentation recordings."""

__version__ = "0.2.0"
