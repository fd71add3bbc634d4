from .library_store import LibraryStore

__all__ = ['LibraryStore']
