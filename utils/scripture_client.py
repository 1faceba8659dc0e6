# utils/scripture_client.py
"""
Client for the third-party scripture providers.

    - bible-api.com: verses, chapters and reference lookups
    - BibleSuperSearch: book list, keyword search, chapter fallback
    - OurManna: verse of the day

Every GET goes through a TTLCache keyed by the full request URL. Provider
failures (network errors, non-2xx statuses, bad JSON) are logged and
reported as None or an empty list; callers render a "not found" state.
"""
import logging
import re
from typing import List, Optional
from urllib.parse import quote

import requests

from models.scripture import (
    Book, BibleVerse, Chapter, ChapterVerse, SearchResult, VerseOfTheDay
)
from utils.book_names import short_name_for
from utils.cache import TTLCache

logger = logging.getLogger(__name__)

BIBLE_API_BASE_URL = "https://bible-api.com/"
BIBLE_SUPERSEARCH_API_BASE_URL = "https://api.biblesupersearch.com/api/"
VERSE_OF_THE_DAY_API_URL = "https://beta.ourmanna.com/api/v1/get?format=json&order=daily"

DEFAULT_TIMEOUT = 10

# "John 3:16", "1 John 4", "Song of Solomon 2:1"
REFERENCE_PATTERN = re.compile(r'^[1-3]?\s?[A-Za-z]+(?:\s[A-Za-z]+)*\s?\d+(?::\d+)?$')


def _encode(value):
    return quote(str(value), safe='')


def is_reference(query):
    return bool(REFERENCE_PATTERN.match(query.strip()))


# ---------- Provider adapters ----------

def verse_of_the_day_from_ourmanna(data) -> Optional[VerseOfTheDay]:
    details = ((data or {}).get('verse') or {}).get('details') or {}
    if not details.get('text'):
        return None
    return VerseOfTheDay(
        text=details['text'],
        reference=details.get('reference', ''),
        version=details.get('version', ''),
    )


def verse_from_bible_api(data) -> Optional[BibleVerse]:
    verses = (data or {}).get('verses') or []
    if not verses:
        return None
    v = verses[0]
    return BibleVerse(
        text=v['text'],
        reference=f"{v['book_name']} {v['chapter']}:{v['verse']}",
        translation=data.get('translation_name', ''),
    )


def chapter_from_bible_api(data, chapter_number) -> Optional[Chapter]:
    verses = (data or {}).get('verses') or []
    if not verses:
        return None
    return Chapter(
        chapter_number=chapter_number,
        verses=[ChapterVerse(verse_number=v['verse'], text=v['text']) for v in verses],
    )


def chapter_from_supersearch(data, chapter_number) -> Optional[Chapter]:
    results = (data or {}).get('results') or {}
    verses = results.get('verses') if isinstance(results, dict) else None
    if not verses:
        return None
    return Chapter(
        chapter_number=chapter_number,
        verses=[ChapterVerse(verse_number=v['verse'], text=v['text']) for v in verses],
    )


def books_from_supersearch(data) -> List[Book]:
    books = []
    for b in (data or {}).get('results') or []:
        verses_per_chapter = {}
        for chapter, count in (b.get('chapter_verses') or {}).items():
            try:
                verses_per_chapter[int(chapter)] = count
            except (TypeError, ValueError):
                continue
        books.append(Book(
            id=b['id'],
            name=b['name'],
            short_name=b.get('shortname', ''),
            chapter_count=b.get('chapters', len(verses_per_chapter)),
            verses_per_chapter=verses_per_chapter,
        ))
    return books


def search_results_from_bible_api(data) -> List[SearchResult]:
    return [
        SearchResult(book=v['book_name'], chapter=v['chapter'], verse=v['verse'], text=v['text'])
        for v in (data or {}).get('verses') or []
    ]


def search_results_from_supersearch(data) -> List[SearchResult]:
    results = (data or {}).get('results') or []
    if not isinstance(results, list):
        return []
    return [
        SearchResult(book=r['book'], chapter=r['chapter'], verse=r['verse'], text=r['text'])
        for r in results
    ]


class ScriptureClient:
    """
    Fetches scripture content from the third-party providers.

    Usage:
        client = ScriptureClient(cache=TTLCache())
        chapter = client.fetch_chapter("John", 3)
        if chapter is None:
            ...  # both providers failed

    Each operation takes an optional timeout (seconds) for the HTTP call;
    a call that exceeds it counts as a provider failure.
    """

    def __init__(self, cache=None, session=None,
                 bible_api_base_url=BIBLE_API_BASE_URL,
                 supersearch_base_url=BIBLE_SUPERSEARCH_API_BASE_URL,
                 verse_of_the_day_url=VERSE_OF_THE_DAY_API_URL,
                 ttl=None, timeout=DEFAULT_TIMEOUT):
        self.cache = cache if cache is not None else TTLCache()
        self.session = session or requests.Session()
        self.bible_api_base_url = bible_api_base_url
        self.supersearch_base_url = supersearch_base_url
        self.verse_of_the_day_url = verse_of_the_day_url
        self.ttl = ttl
        self.timeout = timeout

    @classmethod
    def from_config(cls, config, session=None):
        return cls(
            cache=TTLCache(
                default_ttl=config['SCRIPTURE_CACHE_TTL_SECONDS'],
                max_entries=config.get('SCRIPTURE_CACHE_MAX_ENTRIES') or None,
            ),
            session=session,
            bible_api_base_url=config['BIBLE_API_BASE_URL'],
            supersearch_base_url=config['BIBLE_SUPERSEARCH_API_BASE_URL'],
            verse_of_the_day_url=config['VERSE_OF_THE_DAY_API_URL'],
            timeout=config['SCRIPTURE_REQUEST_TIMEOUT'],
        )

    def _get(self, url, timeout):
        response = self.session.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()

    def _fetch_json(self, url, timeout=None):
        timeout = self.timeout if timeout is None else timeout
        try:
            return self.cache.get_or_fetch(url, lambda: self._get(url, timeout), self.ttl)
        except requests.RequestException as e:
            logger.error(f"Fetch error for {url}: {e}")
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
        return None

    def _adapt(self, adapter, data, *args, default=None):
        if data is None:
            return default
        try:
            return adapter(data, *args)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected response shape in {adapter.__name__}: {e}")
            return default

    def _bible_api_url(self, reference, version):
        return f"{self.bible_api_base_url}{_encode(reference)}?translation={_encode(version)}"

    # ---------- Operations ----------

    def fetch_verse_of_the_day(self, timeout=None) -> Optional[VerseOfTheDay]:
        return self._adapt(verse_of_the_day_from_ourmanna, self._fetch_json(self.verse_of_the_day_url, timeout))

    def fetch_verse(self, reference, version="web", timeout=None) -> Optional[BibleVerse]:
        data = self._fetch_json(self._bible_api_url(reference, version), timeout)
        return self._adapt(verse_from_bible_api, data)

    def fetch_books(self, language="en", timeout=None) -> List[Book]:
        data = self._fetch_json(f"{self.supersearch_base_url}books?language={_encode(language)}", timeout)
        return self._adapt(books_from_supersearch, data, default=[])

    def fetch_chapter(self, book, chapter_number, version="web", timeout=None) -> Optional[Chapter]:
        primary_url = (
            f"{self.bible_api_base_url}{_encode(book)}+{int(chapter_number)}"
            f"?translation={_encode(version)}"
        )
        chapter = self._adapt(chapter_from_bible_api, self._fetch_json(primary_url, timeout), chapter_number)
        if chapter:
            return chapter

        # Fall back to SuperSearch, which wants its own short book codes
        short_book = short_name_for(book) or book
        logger.info(f"Primary provider had no verses for {book} {chapter_number}; trying SuperSearch ({short_book})")
        backup_url = (
            f"{self.supersearch_base_url}verses?bible={_encode(version)}"
            f"&book_name={_encode(short_book)}&chapter={int(chapter_number)}"
        )
        return self._adapt(chapter_from_supersearch, self._fetch_json(backup_url, timeout), chapter_number)

    def search(self, query, version="kjv", timeout=None) -> List[SearchResult]:
        trimmed = query.strip()
        if not trimmed:
            return []

        if is_reference(trimmed):
            # bible-api.com handles direct references best
            return self._adapt(
                search_results_from_bible_api,
                self._fetch_json(self._bible_api_url(trimmed, version), timeout),
                default=[],
            )

        keyword_url = f"{self.supersearch_base_url}search?bible={_encode(version)}&query={_encode(trimmed)}"
        results = self._adapt(search_results_from_supersearch, self._fetch_json(keyword_url, timeout), default=[])
        if results:
            return results

        # bible-api.com is sometimes more generous with loose references
        return self._adapt(
            search_results_from_bible_api,
            self._fetch_json(self._bible_api_url(trimmed, version), timeout),
            default=[],
        )
