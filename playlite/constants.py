"""Shared constants for the library intelligence layer."""

# Genre placeholder used by the library when no genre is known
DEFAULT_GENRE = "Unknown"
# Older imports stored the Portuguese placeholder
LEGACY_DEFAULT_GENRE = "Desconhecido"
PLACEHOLDER_GENRES = (DEFAULT_GENRE, LEGACY_DEFAULT_GENRE)

DEFAULT_PLATFORM = "Other"

# Genre filter sentinel meaning "no genre narrowing"
ALL_GENRES = "all"

# Affinity thresholds for the derived "recommended" flags
TOP_PICK_THRESHOLD = 100.0
UPCOMING_MATCH_THRESHOLD = 50.0

# Profile weights
WEIGHT_PLAYTIME_HOUR = 2.0   # points per hour played
MAX_COUNTED_HOURS = 100.0    # hours beyond this do not add weight
WEIGHT_FAVORITE = 50.0
WEIGHT_RATING_STAR = 10.0

# Home / playlist view caps
CONTINUE_PLAYING_MAX_PLAYTIME = 50
CONTINUE_PLAYING_LIMIT = 5
MOST_PLAYED_LIMIT = 3
BACKLOG_LIMIT = 5
TOP_GENRES_LIMIT = 6
SUGGESTION_MAX_PLAYTIME = 60
SUGGESTION_LIMIT = 10
TRENDING_HERO_COUNT = 5
TRENDING_GRID_COUNT = 10

# RAWG catalog
RAWG_API_URL = "https://api.rawg.io/api/games"
RAWG_TRENDING_PAGE_SIZE = 20
RAWG_UPCOMING_PAGE_SIZE = 10
RAWG_TIMEOUT = 10.0

# Key under which the play queue is persisted
PLAYLIST_STORE_KEY = "user_playlist_queue"
