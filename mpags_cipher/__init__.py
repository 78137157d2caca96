"""Classical cipher command-line tool."""

__version__ = "0.5.0"
