"""A small flat file system on a simulated sector disk, with its supporting containers."""

__version__ = "0.1.0"