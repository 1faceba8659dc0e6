"""Tests for the /api/notes endpoints."""
import json
from datetime import datetime, timezone

import models.user
from database import get_db_session
from models import Note


DOCUMENT = [{"type": "paragraph", "children": [{"text": "God is love", "bold": True}]}]


def _note(**overrides):
    return {"book": "John", "chapter": 3, "verse": 16, "content": json.dumps(DOCUMENT), **overrides}


# ── Create / list ─────────────────────────────────────────────

class TestCreateAndList:
    def test_created_note_is_listed_for_its_chapter(self, client, user_id, auth_headers):
        headers = auth_headers(user_id)
        resp = client.post('/api/notes', json=_note(), headers=headers)
        assert resp.status_code == 201
        created = resp.get_json()

        listed = client.get('/api/notes?book=John&chapter=3', headers=headers).get_json()['notes']
        assert [n['id'] for n in listed] == [created['id']]

    def test_content_is_stored_verbatim(self, client, user_id, auth_headers):
        headers = auth_headers(user_id)
        raw = '[{"type":"paragraph","children":[{"text":"  spaced  "}]}]'
        note_id = client.post('/api/notes', json=_note(content=raw), headers=headers).get_json()['id']
        assert client.get(f'/api/notes/{note_id}', headers=headers).get_json()['content'] == raw

    def test_missing_content_rejected(self, client, user_id, auth_headers):
        payload = _note()
        del payload['content']
        resp = client.post('/api/notes', json=payload, headers=auth_headers(user_id))
        assert resp.status_code == 400
        with get_db_session() as db:
            assert db.query(Note).count() == 0

    def test_filters(self, client, user_id, auth_headers):
        headers = auth_headers(user_id)
        client.post('/api/notes', json=_note(), headers=headers)
        client.post('/api/notes', json=_note(verse=17), headers=headers)
        client.post('/api/notes', json=_note(book='Genesis', chapter=1, verse=1), headers=headers)

        assert len(client.get('/api/notes', headers=headers).get_json()['notes']) == 3
        assert len(client.get('/api/notes?book=John&chapter=3&verse=17', headers=headers).get_json()['notes']) == 1
        assert client.get('/api/notes?verse=x', headers=headers).status_code == 400

    def test_notes_are_private(self, client, user_id, other_user_id, auth_headers):
        client.post('/api/notes', json=_note(), headers=auth_headers(user_id))
        assert client.get('/api/notes', headers=auth_headers(other_user_id)).get_json()['notes'] == []

    def test_requires_session(self, client):
        assert client.get('/api/notes').status_code == 401
        assert client.post('/api/notes', json=_note()).status_code == 401


# ── Single note ───────────────────────────────────────────────

class TestSingleNote:
    def test_update_content(self, client, user_id, auth_headers):
        headers = auth_headers(user_id)
        created = client.post('/api/notes', json=_note(), headers=headers).get_json()

        new_content = json.dumps([{"type": "paragraph", "children": [{"text": "Edited"}]}])
        resp = client.patch(f"/api/notes/{created['id']}", json={'content': new_content}, headers=headers)
        assert resp.status_code == 200

        fetched = client.get(f"/api/notes/{created['id']}", headers=headers).get_json()
        assert fetched['content'] == new_content
        assert fetched['verse'] == 16

    def test_other_user_gets_404(self, client, user_id, other_user_id, auth_headers):
        note_id = client.post('/api/notes', json=_note(), headers=auth_headers(user_id)).get_json()['id']
        other = auth_headers(other_user_id)
        assert client.get(f'/api/notes/{note_id}', headers=other).status_code == 404
        assert client.patch(f'/api/notes/{note_id}', json={'verse': 2}, headers=other).status_code == 404
        assert client.delete(f'/api/notes/{note_id}', headers=other).status_code == 404

    def test_delete(self, client, user_id, auth_headers):
        headers = auth_headers(user_id)
        note_id = client.post('/api/notes', json=_note(), headers=headers).get_json()['id']
        assert client.delete(f'/api/notes/{note_id}', headers=headers).status_code == 200
        resp = client.delete(f'/api/notes/{note_id}', headers=headers)
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Note not found"}


# ── Timestamps ────────────────────────────────────────────────

class FrozenDatetime(datetime):
    """datetime whose now() returns a value the test controls."""
    current = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    @classmethod
    def now(cls, tz=None):
        return cls.current


class TestTimestamps:
    def test_patch_refreshes_updated_at_only(self, client, user_id, auth_headers, monkeypatch):
        monkeypatch.setattr(models.user, 'datetime', FrozenDatetime)
        headers = auth_headers(user_id)

        created = client.post('/api/notes', json=_note(), headers=headers).get_json()
        assert created['createdAt'].startswith('2024-01-01T09:00')
        assert created['updatedAt'].startswith('2024-01-01T09:00')

        monkeypatch.setattr(FrozenDatetime, 'current', datetime(2024, 1, 2, 18, 30, tzinfo=timezone.utc))
        resp = client.patch(f"/api/notes/{created['id']}", json={'content': 'Revised'}, headers=headers)
        assert resp.status_code == 200

        fetched = client.get(f"/api/notes/{created['id']}", headers=headers).get_json()
        assert fetched['createdAt'] == created['createdAt']
        assert fetched['updatedAt'].startswith('2024-01-02T18:30')
        assert fetched['content'] == 'Revised'
