"""External catalog providers."""

from .rawg import RawgClient

__all__ = ["RawgClient"]
