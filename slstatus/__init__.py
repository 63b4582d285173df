"""A small status monitor that renders system information as one line."""

__version__ = "1.1"