"""News and social media monitoring API for government analysts."""

__version__ = "0.1.0"
