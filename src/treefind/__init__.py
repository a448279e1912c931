"""treefind: find files and folders by name from the terminal."""

from treefind.version import __version__

__all__ = ["__version__"]
