"""HTTP API for vtrack."""

from .. import __version__

__all__ = ["__version__"]
