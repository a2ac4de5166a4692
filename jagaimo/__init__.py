"""Parser for a compact command-line interface specification language."""

__version__ = "0.1.0"