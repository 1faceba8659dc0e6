# utils/api_client.py
"""
Client for the Bible Nav REST API.

Request bodies go out as JSON. Failed requests raise ApiError carrying the
server's message so callers have a single error shape to display. Successful
responses have every ISO-8601 timestamp string turned into a datetime.
"""
import logging
import re
from datetime import datetime

import requests

from utils import rich_text

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

ISO_DATETIME_PATTERN = re.compile(
    r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?$'
)


class ApiError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def revive_dates(value):
    """Recursively replace ISO-8601 timestamp strings with datetimes."""
    if isinstance(value, dict):
        return {k: revive_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [revive_dates(v) for v in value]
    if isinstance(value, str) and ISO_DATETIME_PATTERN.match(value):
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return value
    return value


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get('error') or body.get('message')
        if message:
            return message
    text = (response.text or '').strip()
    return text or f"API Error: {response.status_code}"


class BibleNavClient:
    """
    Usage:
        client = BibleNavClient("http://localhost:5001/api")
        client.login("a@b.com", "secret1")
        for fav in client.list_favorites():
            print(fav["book"], fav["createdAt"].year)
    """

    def __init__(self, base_url, token=None, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method, endpoint, body=None, params=None):
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        response = self.session.request(
            method,
            url,
            json=body,
            params=params or None,
            headers=headers,
            timeout=self.timeout,
        )

        if not (200 <= response.status_code < 300):
            message = _error_message(response)
            logger.warning(f"{method} {endpoint} failed with {response.status_code}: {message}")
            raise ApiError(message, response.status_code)

        if not response.content:
            return None
        return revive_dates(response.json())

    # ---------- Auth ----------

    def signup(self, email, password, username=None):
        return self.request('POST', '/signup', {'email': email, 'password': password, 'username': username})

    def login(self, email, password):
        data = self.request('POST', '/login', {'email': email, 'password': password})
        self.token = data['token']
        return data['user']

    def logout(self):
        data = self.request('POST', '/logout')
        self.token = None
        return data

    def current_session(self):
        return self.request('GET', '/session')['user']

    # ---------- Favorites ----------

    def list_favorites(self, book=None, chapter=None):
        return self.request('GET', '/favorites', params={'book': book, 'chapter': chapter})['verses']

    def add_favorite(self, book, chapter, verse_number, verse_text):
        return self.request('POST', '/favorites', {
            'book': book,
            'chapter': chapter,
            'verseNumber': verse_number,
            'verseText': verse_text,
        })

    def get_favorite(self, favorite_id):
        return self.request('GET', f'/favorites/{favorite_id}')

    def update_favorite(self, favorite_id, **changes):
        return self.request('PATCH', f'/favorites/{favorite_id}', changes)

    def delete_favorite(self, favorite_id):
        return self.request('DELETE', f'/favorites/{favorite_id}')

    # ---------- Notes ----------

    def list_notes(self, book=None, chapter=None, verse=None):
        params = {'book': book, 'chapter': chapter, 'verse': verse}
        return self.request('GET', '/notes', params=params)['notes']

    def create_note(self, book, chapter, verse, content):
        return self.request('POST', '/notes', {
            'book': book,
            'chapter': chapter,
            'verse': verse,
            'content': content,
        })

    def save_note(self, book, chapter, verse, document):
        """Serialize an editor document and store it as a new note."""
        if rich_text.is_blank(document):
            raise ValueError("Note is empty and cannot be saved.")
        content = document if isinstance(document, str) else rich_text.dump_document(document)
        return self.create_note(book, chapter, verse, content)

    def get_note(self, note_id):
        return self.request('GET', f'/notes/{note_id}')

    def update_note(self, note_id, **changes):
        return self.request('PATCH', f'/notes/{note_id}', changes)

    def delete_note(self, note_id):
        return self.request('DELETE', f'/notes/{note_id}')

    # ---------- AI ----------

    def ask(self, prompt):
        return self.request('POST', '/ai', {'prompt': prompt})['answer']
