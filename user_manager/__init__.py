"""Local Linux account administration: add, delete, archive, restore, passwords."""

from .__version__ import __version__

__all__ = ["__version__"]
