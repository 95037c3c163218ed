"""Resolve a fallen-into label to up to three related words.

Lookup chain:

1. the local `WORD_RELATIONS` table,
2. the remote service: related-by-context, then related-by-meaning,
3. synthetic words built from the label plus fixed suffixes.

The result is then capped and filtered against labels already in use. Remote
failures are reported on the console and treated as "no result"; `resolve()`
never raises for lookup problems.

The remote step can block for the length of an HTTP request, so the level
controller runs `lookup_remote_or_fallback()` on a worker thread and only
calls `finalize()` back on the main thread.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from words.datamuse import DatamuseClient, WordLookupError
from words.relations import local_related_words
from config import RELATED_WORD_LIMIT, FALLBACK_SUFFIXES, FALLBACK_MAX_LENGTH


class WordAssociationResolver:
    def __init__(
        self,
        client: Optional[DatamuseClient] = None,
        *,
        limit: int = RELATED_WORD_LIMIT,
        suffixes: Iterable[str] = FALLBACK_SUFFIXES,
        max_length: int = FALLBACK_MAX_LENGTH,
    ) -> None:
        self.client = client if client is not None else DatamuseClient()
        self.limit = limit
        self.suffixes = tuple(suffixes)
        self.max_length = max_length

    # ------------------------------------------------------------------
    def lookup_local(self, label: str) -> Optional[List[str]]:
        return local_related_words(label)

    def lookup_remote(self, label: str) -> Optional[List[str]]:
        """Context query first, meaning query second; None when both are empty.

        A failed query counts as an empty one, so the next variant still runs.
        """
        for query in (self.client.related_by_context, self.client.related_by_meaning):
            try:
                words = query(label, self.limit)
            except WordLookupError as e:
                print(f"[Words] Failed to fetch related words for '{label}': {e}")
                continue
            if words:
                return words[: self.limit]
        return None

    def synthesize(self, label: str) -> List[str]:
        candidates = [(label + suffix)[: self.max_length] for suffix in self.suffixes]
        return [w for w in candidates if len(label) < len(w) <= self.max_length]

    def lookup_remote_or_fallback(self, label: str) -> List[str]:
        words = self.lookup_remote(label)
        if not words:
            words = self.synthesize(label)
        return words

    # ------------------------------------------------------------------
    def finalize(self, words: Iterable[str], existing_labels: Iterable[str] = ()) -> List[str]:
        """Cap to `limit`, then drop words already used as labels (any case)."""
        taken = {label.lower() for label in existing_labels}
        capped = list(words)[: self.limit]
        return [w for w in capped if w.lower() not in taken]

    def resolve(self, label: str, existing_labels: Iterable[str] = ()) -> List[str]:
        """Run the whole chain synchronously."""
        words = self.lookup_local(label)
        if words is None:
            words = self.lookup_remote_or_fallback(label)
        return self.finalize(words, existing_labels)
