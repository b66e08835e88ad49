"""Website icon resolution for bookmarks."""

__version__ = "0.1.0"
