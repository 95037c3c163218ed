import pytest
import requests

from words.datamuse import DatamuseClient, WordLookupError
from words.resolver import WordAssociationResolver


def test_local_table_hit_skips_remote(fake_client_factory):
    client = fake_client_factory(context=["nope"])
    resolver = WordAssociationResolver(client)
    assert resolver.resolve("Love") == ["passion", "connection", "warmth"]
    assert client.calls == []


def test_remote_context_result_used_first(fake_client_factory):
    client = fake_client_factory(context=["kettle", "pot"], meaning=["brew"])
    resolver = WordAssociationResolver(client)
    assert resolver.resolve("tea") == ["kettle", "pot"]
    assert client.calls == [("context", "tea", 3)]


def test_meaning_query_when_context_is_empty(fake_client_factory):
    client = fake_client_factory(context=[], meaning=["brew", "chai"])
    resolver = WordAssociationResolver(client)
    assert resolver.resolve("tea") == ["brew", "chai"]
    assert [c[0] for c in client.calls] == ["context", "meaning"]


def test_remote_results_capped_at_three(fake_client_factory):
    client = fake_client_factory(context=["a1", "b2", "c3", "d4", "e5"])
    assert WordAssociationResolver(client).resolve("zzz") == ["a1", "b2", "c3"]


def test_total_network_failure_synthesizes(offline_client, capsys):
    resolver = WordAssociationResolver(offline_client)
    words = resolver.resolve("zorb", existing_labels=["ZORBING"])
    assert words == ["zorbness", "zorbful"]
    for word in words:
        assert word.startswith("zorb")
        assert len(word) <= 20
    assert "[Words]" in capsys.readouterr().out


def test_empty_remote_results_synthesize(fake_client_factory):
    resolver = WordAssociationResolver(fake_client_factory())
    assert resolver.resolve("zorb") == ["zorbness", "zorbing", "zorbful"]


def test_synthetic_words_truncated_to_max_length(offline_client):
    resolver = WordAssociationResolver(offline_client)
    label = "abcdefghijklmnopqr"  # 18 characters
    assert resolver.synthesize(label) == [
        "abcdefghijklmnopqrne",
        "abcdefghijklmnopqrin",
        "abcdefghijklmnopqrfu",
    ]
    assert resolver.synthesize("a" * 20) == []
    assert resolver.resolve("b" * 25) == []


def test_existing_labels_filtered_case_insensitively(fake_client_factory):
    resolver = WordAssociationResolver(fake_client_factory())
    assert resolver.resolve("love", existing_labels=["Passion", "warmth"]) == ["connection"]


def test_filter_happens_after_cap():
    resolver = WordAssociationResolver(client=object())
    assert resolver.finalize(["a", "b", "c", "d"], existing_labels=["b"]) == ["a", "c"]


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------
class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload = payload
        self.status = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        if self.bad_json:
            raise ValueError("not json")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


def test_client_builds_queries():
    session = FakeSession(FakeResponse([{"word": "kettle", "score": 9}, {"word": "pot"}]))
    client = DatamuseClient("http://words.test/words", timeout=2.5, session=session)
    assert client.related_by_context("tea", 3) == ["kettle", "pot"]
    assert client.related_by_meaning("tea", 2) == ["kettle", "pot"]
    assert session.requests == [
        ("http://words.test/words", {"rel_jjb": "tea", "max": 3}, 2.5),
        ("http://words.test/words", {"ml": "tea", "max": 2}, 2.5),
    ]


def test_client_truncates_to_limit():
    payload = [{"word": w} for w in ["a", "b", "c", "d"]]
    client = DatamuseClient(session=FakeSession(FakeResponse(payload)))
    assert client.related_by_meaning("x", 3) == ["a", "b", "c"]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse([], status=503)),
        FakeSession(FakeResponse(bad_json=True)),
        FakeSession(FakeResponse({"word": "dict"})),
        FakeSession(FakeResponse([{"score": 1}])),
    ],
)
def test_client_failures_raise_lookup_error(session):
    client = DatamuseClient(session=session)
    with pytest.raises(WordLookupError):
        client.related_by_context("tea")


def test_resolver_survives_http_failure():
    client = DatamuseClient(session=FakeSession(error=requests.ConnectionError("offline")))
    assert WordAssociationResolver(client).resolve("tea") == ["teaness", "teaing", "teaful"]


def test_failed_context_query_falls_through_to_meaning(fake_client_factory):
    class ContextDown(fake_client_factory):
        def related_by_context(self, word, limit=3):
            self.calls.append(("context", word, limit))
            raise WordLookupError("503")

    client = ContextDown(meaning=["brew", "chai"])
    assert WordAssociationResolver(client).resolve("tea") == ["brew", "chai"]
    assert [c[0] for c in client.calls] == ["context", "meaning"]


def test_both_queries_attempted_when_offline(offline_client):
    WordAssociationResolver(offline_client).resolve("zorb")
    assert [c[0] for c in offline_client.calls] == ["context", "meaning"]
