"""COT positioning parser, signal engine and report history."""

__version__ = "0.3.0"
