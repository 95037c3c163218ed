"""Thin client for a Datamuse-compatible word association endpoint.

Two queries are exposed:

- related_by_context(word, limit): words that commonly appear around `word`
  (Datamuse ``rel_jjb``).
- related_by_meaning(word, limit): words with a similar meaning (``ml``).

Every failure (connection problems, timeouts, non-2xx statuses, payloads that
are not a list of ``{"word": ...}`` objects) is raised as `WordLookupError`
so callers only have one thing to catch.
"""

from __future__ import annotations

from typing import List, Optional

import requests

from config import WORDS_API_URL, WORDS_API_TIMEOUT, RELATED_WORD_LIMIT


class WordLookupError(Exception):
    """The remote word service could not produce an answer."""


class DatamuseClient:
    def __init__(
        self,
        base_url: str = WORDS_API_URL,
        *,
        timeout: float = WORDS_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def related_by_context(self, word: str, limit: int = RELATED_WORD_LIMIT) -> List[str]:
        return self._query({"rel_jjb": word, "max": limit}, limit)

    def related_by_meaning(self, word: str, limit: int = RELATED_WORD_LIMIT) -> List[str]:
        return self._query({"ml": word, "max": limit}, limit)

    def _query(self, params: dict, limit: int) -> List[str]:
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise WordLookupError(f"request failed: {e}") from e
        except ValueError as e:
            raise WordLookupError(f"invalid JSON from word service: {e}") from e

        if not isinstance(data, list):
            raise WordLookupError(f"unexpected payload type {type(data).__name__}")

        words: List[str] = []
        for item in data[:limit]:
            word = item.get("word") if isinstance(item, dict) else None
            if not isinstance(word, str):
                raise WordLookupError(f"malformed entry in word service payload: {item!r}")
            words.append(word)
        return words

    def close(self) -> None:
        self.session.close()
