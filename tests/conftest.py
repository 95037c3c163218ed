import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from words.datamuse import WordLookupError


class FakeWordClient:
    """Stands in for DatamuseClient; records every query."""

    def __init__(self, context=(), meaning=(), error=None):
        self.context = list(context)
        self.meaning = list(meaning)
        self.error = error
        self.calls = []

    def related_by_context(self, word, limit=3):
        self.calls.append(("context", word, limit))
        if self.error is not None:
            raise self.error
        return list(self.context)

    def related_by_meaning(self, word, limit=3):
        self.calls.append(("meaning", word, limit))
        if self.error is not None:
            raise self.error
        return list(self.meaning)


@pytest.fixture
def offline_client():
    return FakeWordClient(error=WordLookupError("network down"))


@pytest.fixture
def fake_client_factory():
    return FakeWordClient
