"""Terminal reference for Python language topics."""

__version__ = "0.1.0"
