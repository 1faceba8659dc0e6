# utils/rich_text.py
"""Helpers for note documents produced by the rich-text editor.

A document is a list of block nodes ({"type": "paragraph", "children": [...]})
whose leaves are text nodes ({"text": "...", "bold": true}). Notes travel
over the wire as the JSON serialization of that list.
"""
import json

PREVIEW_LENGTH = 50


def _paragraph(text):
    return [{"type": "paragraph", "children": [{"text": text}]}]


def load_document(content):
    """Return the node list for a document or its JSON serialization.

    Anything that is not a node list or a single node (plain text, or a
    string that happens to parse as a JSON scalar such as "42") is
    treated as one paragraph of text.
    """
    if content is None:
        return []
    if isinstance(content, str):
        try:
            parsed = json.loads(content)
        except ValueError:
            # Plain text saved before the editor existed
            return _paragraph(content)
        if not isinstance(parsed, (list, dict)):
            return _paragraph(content)
        content = parsed
    if isinstance(content, dict):
        return [content]
    if isinstance(content, list):
        return content
    return _paragraph(str(content))


def node_text(node):
    """Concatenated text of every leaf below node."""
    if not isinstance(node, dict):
        return ''
    if 'text' in node:
        return str(node['text'])
    return ''.join(node_text(child) for child in node.get('children') or [])


def plain_text(content):
    return ' '.join(node_text(node) for node in load_document(content))


def is_blank(content):
    return all(not node_text(node).strip() for node in load_document(content))


def preview(content, limit=PREVIEW_LENGTH):
    text = plain_text(content)
    return text[:limit] + '...' if len(text) > limit else text


def dump_document(document):
    return json.dumps(document, separators=(',', ':'))
