"""Tools for listing, extracting and building .cat/.dat packages."""

__version__ = "0.1.0"