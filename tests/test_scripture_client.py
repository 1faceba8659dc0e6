"""Tests for utils/scripture_client.py against a fake HTTP session."""
import requests

from models.scripture import Chapter
from utils.book_names import short_name_for
from utils.scripture_client import ScriptureClient, is_reference
from utils.cache import TTLCache

from conftest import FakeResponse, FakeSession


JOHN_3_PRIMARY = "https://bible-api.com/John+3?translation=web"
JOHN_3_BACKUP = "https://api.biblesupersearch.com/api/verses?bible=web&book_name=Joh&chapter=3"

BIBLE_API_JOHN_3 = {
    "reference": "John 3",
    "verses": [
        {"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved the world"},
        {"book_name": "John", "chapter": 3, "verse": 17, "text": "For God didn't send his Son"},
    ],
    "translation_name": "World English Bible",
}

SUPERSEARCH_JOHN_3 = {
    "results": {
        "verses": [
            {"verse": 16, "text": "For God so loved the world"},
        ]
    }
}


def _client(routes):
    session = FakeSession(routes)
    return ScriptureClient(cache=TTLCache(default_ttl=60), session=session), session


# ── Chapters ──────────────────────────────────────────────────

class TestFetchChapter:
    def test_primary_provider(self):
        client, session = _client({JOHN_3_PRIMARY: BIBLE_API_JOHN_3})
        chapter = client.fetch_chapter("John", 3)
        assert isinstance(chapter, Chapter)
        assert chapter.chapter_number == 3
        assert [v.verse_number for v in chapter.verses] == [16, 17]
        assert session.count(JOHN_3_BACKUP) == 0

    def test_second_call_is_served_from_cache(self):
        client, session = _client({JOHN_3_PRIMARY: BIBLE_API_JOHN_3})
        first = client.fetch_chapter("John", 3)
        second = client.fetch_chapter("John", 3)
        assert first == second
        assert session.count(JOHN_3_PRIMARY) == 1

    def test_falls_back_with_short_name_when_primary_empty(self):
        client, session = _client({
            JOHN_3_PRIMARY: {"verses": []},
            JOHN_3_BACKUP: SUPERSEARCH_JOHN_3,
        })
        chapter = client.fetch_chapter("John", 3)
        assert chapter.verses[0].text == "For God so loved the world"
        assert session.count(JOHN_3_BACKUP) == 1

    def test_falls_back_when_primary_errors(self):
        client, _ = _client({
            JOHN_3_PRIMARY: FakeResponse(500, {"error": "boom"}),
            JOHN_3_BACKUP: SUPERSEARCH_JOHN_3,
        })
        assert client.fetch_chapter("John", 3) is not None

    def test_unknown_book_uses_raw_name_for_fallback(self):
        client, session = _client({})
        assert client.fetch_chapter("Enoch", 1) is None
        assert "https://api.biblesupersearch.com/api/verses?bible=web&book_name=Enoch&chapter=1" in session.calls

    def test_both_providers_failing_returns_none(self):
        client, _ = _client({
            JOHN_3_PRIMARY: requests.ConnectionError("offline"),
            JOHN_3_BACKUP: requests.Timeout("slow"),
        })
        assert client.fetch_chapter("John", 3) is None

    def test_malformed_payload_returns_none(self):
        client, _ = _client({
            JOHN_3_PRIMARY: {"verses": [{"unexpected": True}]},
            JOHN_3_BACKUP: {"results": "nope"},
        })
        assert client.fetch_chapter("John", 3) is None

    def test_failed_fetch_is_retried(self):
        client, session = _client({JOHN_3_PRIMARY: requests.ConnectionError("offline")})
        client.fetch_chapter("John", 3)
        session.routes[JOHN_3_PRIMARY] = BIBLE_API_JOHN_3
        assert client.fetch_chapter("John", 3) is not None
        assert session.count(JOHN_3_PRIMARY) == 2


# ── Verses ────────────────────────────────────────────────────

class TestFetchVerse:
    def test_verse_reference_is_built_from_payload(self):
        url = "https://bible-api.com/John%203%3A16?translation=web"
        client, _ = _client({url: {
            "verses": [{"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved"}],
            "translation_name": "World English Bible",
        }})
        verse = client.fetch_verse("John 3:16")
        assert verse.reference == "John 3:16"
        assert verse.translation == "World English Bible"

    def test_verse_of_the_day(self):
        client, _ = _client({
            "https://beta.ourmanna.com/api/v1/get?format=json&order=daily": {
                "verse": {"details": {"text": "Be still", "reference": "Psalm 46:10", "version": "NIV"}}
            }
        })
        votd = client.fetch_verse_of_the_day()
        assert votd.to_json() == {"text": "Be still", "reference": "Psalm 46:10", "version": "NIV"}

    def test_verse_of_the_day_unavailable(self):
        client, _ = _client({})
        assert client.fetch_verse_of_the_day() is None


# ── Books ─────────────────────────────────────────────────────

class TestFetchBooks:
    def test_books_with_verse_counts(self):
        client, _ = _client({
            "https://api.biblesupersearch.com/api/books?language=en": {
                "results": [
                    {"id": 1, "name": "Genesis", "shortname": "Gen", "chapters": 2,
                     "chapter_verses": {"1": 31, "2": 25}},
                ]
            }
        })
        books = client.fetch_books()
        assert len(books) == 1
        assert books[0].verses_per_chapter == {1: 31, 2: 25}
        assert books[0].to_json()["versesPerChapter"] == {"1": 31, "2": 25}

    def test_provider_down_returns_empty_list(self):
        client, _ = _client({})
        assert client.fetch_books() == []


# ── Search ────────────────────────────────────────────────────

class TestSearch:
    def test_reference_query_goes_to_bible_api(self):
        url = "https://bible-api.com/John%203%3A16?translation=kjv"
        client, session = _client({url: {
            "verses": [{"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved"}]
        }})
        results = client.search("John 3:16")
        assert [(r.book, r.chapter, r.verse) for r in results] == [("John", 3, 16)]
        assert session.calls == [url]

    def test_keyword_query_uses_supersearch(self):
        url = "https://api.biblesupersearch.com/api/search?bible=kjv&query=faith%20hope"
        client, _ = _client({url: {
            "results": [{"book": "1 Corinthians", "chapter": 13, "verse": 13, "text": "And now abideth faith, hope"}]
        }})
        results = client.search("faith hope")
        assert results[0].book == "1 Corinthians"

    def test_keyword_query_falls_back_to_bible_api(self):
        fallback = "https://bible-api.com/shortest%20verse%3F?translation=kjv"
        client, session = _client({})
        assert client.search("shortest verse?") == []
        assert fallback in session.calls

    def test_blank_query_makes_no_request(self):
        client, session = _client({})
        assert client.search("   ") == []
        assert session.calls == []


# ── Helpers ───────────────────────────────────────────────────

class TestHelpers:
    def test_is_reference(self):
        assert is_reference("John 3:16")
        assert is_reference("1 John 4")
        assert is_reference("Song of Solomon 2:1")
        assert not is_reference("love your neighbor")

    def test_short_name_for(self):
        assert short_name_for("John") == "Joh"
        assert short_name_for("1 john") == "1Jo"
        assert short_name_for("Psalm") == "Psa"
        assert short_name_for("Enoch") is None

    def test_from_config(self, app):
        client = ScriptureClient.from_config(app.config, session=FakeSession())
        assert client.cache.default_ttl == app.config['SCRIPTURE_CACHE_TTL_SECONDS']
        assert client.cache.max_entries == app.config['SCRIPTURE_CACHE_MAX_ENTRIES']
