"""
Data model shared by the library store, the catalog client and the
recommendation services.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Tuple


@dataclass
class LibraryGame:
    """A game owned by the user"""
    id: str
    name: str
    genre: Optional[str] = None  # comma-separated, e.g. "RPG, Action"
    platform: Optional[str] = None
    cover_url: Optional[str] = None
    playtime: int = 0  # minutes
    rating: Optional[int] = None  # 1-5 stars
    favorite: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LibraryGame":
        if not isinstance(data, dict):
            raise TypeError(f"game entry must be an object, got {type(data).__name__}")
        rating = data.get('rating')
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            genre=data.get('genre'),
            platform=data.get('platform'),
            cover_url=data.get('cover_url'),
            playtime=max(int(data.get('playtime') or 0), 0),
            rating=int(rating) if rating is not None else None,
            favorite=bool(data.get('favorite', False)),
        )


@dataclass(frozen=True)
class CatalogGame:
    """A game from the external catalog (RAWG). Immutable once fetched."""
    id: int
    name: str
    background_image: Optional[str] = None
    rating: float = 0.0
    released: Optional[str] = None
    genres: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['genres'] = list(self.genres)
        return data

    @classmethod
    def from_rawg(cls, data: Dict[str, Any]) -> "CatalogGame":
        """Build from a RAWG `results` entry; genres arrive as [{"name": ...}]."""
        genres = []
        for genre in data.get('genres') or []:
            name = genre.get('name') if isinstance(genre, dict) else genre
            if name:
                genres.append(name)
        return cls(
            id=int(data['id']),
            name=data.get('name', ''),
            background_image=data.get('background_image'),
            rating=float(data.get('rating') or 0.0),
            released=data.get('released'),
            genres=tuple(genres),
        )


@dataclass(frozen=True)
class GenreScore:
    name: str
    score: float
    game_count: int = 0


@dataclass(frozen=True)
class GenreProfile:
    """
    Snapshot of the user's genre preferences.

    Built from play history and treated as a read-only value; a new profile
    is built whenever the library changes.
    """
    top_genres: Tuple[GenreScore, ...] = ()
    total_playtime: int = 0
    total_games: int = 0

    def score_for(self, genre: str) -> Optional[GenreScore]:
        """Case-insensitive lookup of a genre entry; the first match wins."""
        wanted = genre.lower()
        for entry in self.top_genres:
            if entry.name.lower() == wanted:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'top_genres': [asdict(g) for g in self.top_genres],
            'total_playtime': self.total_playtime,
            'total_games': self.total_games,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenreProfile":
        top_genres = tuple(
            GenreScore(
                name=g['name'],
                score=max(float(g.get('score', 0.0)), 0.0),
                game_count=int(g.get('game_count', 0)),
            )
            for g in data.get('top_genres', [])
        )
        return cls(
            top_genres=top_genres,
            total_playtime=int(data.get('total_playtime', 0)),
            total_games=int(data.get('total_games', 0)),
        )
