"""Business logic services for Playlite."""

from .catalog_service import CatalogService
from .playlist import PlaylistQueue
from .profile import build_profile

__all__ = ['CatalogService', 'PlaylistQueue', 'build_profile']
