"""Daily fantasy-hockey lineup optimizer."""

__version__ = "0.1.0"
