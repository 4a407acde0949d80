"""pyfc: compare two files byte by byte or line by line."""

__version__ = "0.1.0"
