"""Title and genre normalization helpers."""

import re
from typing import List, Optional

_NON_ALNUM = re.compile(r'[^a-z0-9]')


def normalize(title: str) -> str:
    """Comparison key for a title: lower-case, ASCII letters and digits only.

    "The Witcher 3" and "the-witcher-3" share the key "thewitcher3". Titles that
    differ only in punctuation collapse to one key as well
    ("Marvel's Spider-Man" / "Marvels SpiderMan"); this is a known limitation.
    Never use the result for display.
    """
    return _NON_ALNUM.sub('', title.lower())


def parse_genres(genre_text: Optional[str]) -> List[str]:
    """Split a library genre field ("RPG, Action") into trimmed labels."""
    if not genre_text:
        return []
    return [g.strip() for g in genre_text.split(',') if g.strip()]
