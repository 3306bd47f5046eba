"""Home index synthesis for markdown wikis."""

__version__ = "0.1.0"
