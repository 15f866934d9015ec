"""Server-rendered blog with category and tag browsing."""

__version__ = "1.0.0"
