"""Hand-picked related words, consulted before any remote lookup.

Keys are lowercase; each list already holds at most three entries.
"""

from typing import List, Optional

WORD_RELATIONS = {
    "love": ["passion", "connection", "warmth"],
    "fear": ["anxiety", "dread", "worry"],
    "dream": ["hope", "vision", "aspiration"],
    "music": ["harmony", "rhythm", "melody"],
    "hope": ["faith", "optimism", "light"],
    "pain": ["hurt", "sorrow", "ache"],
    "joy": ["happiness", "delight", "bliss"],
    "death": ["loss", "change", "ending"],
    "life": ["journey", "existence", "living"],
    "time": ["moment", "hours", "eternity"],
    "beauty": ["grace", "elegance", "wonder"],
    "truth": ["honesty", "reality", "clarity"],
    "nature": ["earth", "wild", "growth"],
    "mind": ["thought", "reason", "spirit"],
    "heart": ["love", "feeling", "soul"],
}


def local_related_words(label: str) -> Optional[List[str]]:
    """Return the table entry for `label` (case-insensitive) or None."""
    words = WORD_RELATIONS.get(label.lower())
    return list(words) if words is not None else None
