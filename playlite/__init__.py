# Backend package for Playlite
# Library intelligence: genre affinity, catalog cache and dedup, ranking, play queue.

from .models import LibraryGame, CatalogGame, GenreScore, GenreProfile
from .errors import (
    PlayliteError,
    CatalogError,
    MissingCredentialError,
    UnauthorizedError,
    TransportError,
    PersistenceError,
)
