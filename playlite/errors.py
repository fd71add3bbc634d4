"""
Playlite exceptions.

Error codes are i18n keys so the frontend can translate them directly.
"""
from typing import Any, Dict


class PlayliteError(Exception):
    """Base exception for Playlite"""
    code = "errors.unknown"

    def __init__(self, message: str = "", code: str = None):
        self.message = message or self.__class__.__doc__ or ""
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': False,
            'error': self.code,
            'message': self.message,
        }


class CatalogError(PlayliteError):
    """Catalog fetch failed"""
    code = "errors.catalogFetchFailed"


class MissingCredentialError(CatalogError):
    """RAWG API key is not configured"""
    code = "errors.rawgKeyMissing"


class UnauthorizedError(CatalogError):
    """RAWG API key was rejected"""
    code = "errors.rawgKeyInvalid"

    def __init__(self, message: str = "", status: int = 401):
        self.status = status
        super().__init__(message)


class TransportError(CatalogError):
    """Catalog request failed"""
    code = "errors.catalogFetchFailed"

    def __init__(self, message: str = "", status: int = None):
        self.status = status
        super().__init__(message)


class PersistenceError(PlayliteError):
    """Could not write to local storage"""
    code = "errors.persistenceFailed"
