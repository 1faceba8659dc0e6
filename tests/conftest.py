"""
Shared fixtures: an app on TestingConfig with an in-memory SQLite database,
stand-ins for the third-party HTTP sessions and a session adapter that lets
BibleNavClient talk to the Flask test client.
"""
import json
from types import SimpleNamespace
from urllib.parse import urlsplit

import pytest
import requests

from app import create_app
from config import TestingConfig
from database import get_db_session
from models import User
from utils.ai import BibleAssistant
from utils.auth import generate_token, hash_password
from utils.cache import TTLCache
from utils.scripture_client import ScriptureClient


# ── Fake third-party HTTP ─────────────────────────────────────

class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else (json.dumps(payload) if payload is not None else '')
        self.content = self.text.encode('utf-8')

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Maps exact URLs to payloads, FakeResponses or exceptions; anything else is a 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        result = self.routes.get(url)
        if isinstance(result, Exception):
            raise result
        if isinstance(result, FakeResponse):
            return result
        if result is None:
            return FakeResponse(404, {"error": "not found"})
        return FakeResponse(200, result)

    def count(self, url):
        return self.calls.count(url)


@pytest.fixture()
def fake_http():
    return FakeSession()


@pytest.fixture()
def scripture_client(fake_http):
    return ScriptureClient(cache=TTLCache(default_ttl=60), session=fake_http)


# ── Fake Anthropic ────────────────────────────────────────────

class FakeMessages:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(content=[SimpleNamespace(type='text', text=self.reply)])


@pytest.fixture()
def fake_anthropic():
    return SimpleNamespace(messages=FakeMessages("Jesus wept is the shortest verse."))


# ── App ───────────────────────────────────────────────────────

@pytest.fixture()
def app(scripture_client):
    app = create_app(TestingConfig)
    app.extensions['scripture_client'] = scripture_client
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def make_user(email='alice@example.com', password='secret1', username='alice'):
    with get_db_session() as db:
        user = User(email=email, username=username, password=hash_password(password) if password else None)
        db.add(user)
        db.flush()
        return user.id


@pytest.fixture()
def user_id(app):
    return make_user()


@pytest.fixture()
def other_user_id(app):
    return make_user(email='bob@example.com', username='bob')


@pytest.fixture()
def auth_headers(app):
    def _headers(uid):
        with app.app_context():
            return {'Authorization': f"Bearer {generate_token(uid)}"}
    return _headers


@pytest.fixture()
def assistant(app, fake_anthropic):
    assistant = BibleAssistant(api_key='test-key', client=fake_anthropic)
    app.extensions['bible_assistant'] = assistant
    return assistant


# ── BibleNavClient over the Flask test client ─────────────────

class FlaskTestSession:
    """requests.Session stand-in that routes BibleNavClient calls into the app."""

    def __init__(self, test_client):
        self.test_client = test_client

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        parts = urlsplit(url)
        resp = self.test_client.open(
            parts.path,
            method=method,
            json=json,
            query_string=params,
            headers=headers,
        )
        return FakeResponse(
            status_code=resp.status_code,
            payload=resp.get_json(silent=True),
            text=resp.get_data(as_text=True),
        )


@pytest.fixture()
def api_session(client):
    return FlaskTestSession(client)
