# models/scripture.py
"""Provider-independent shapes for scripture content.

Each third-party provider returns its own JSON layout; the adapters in
utils/scripture_client.py map them onto these types.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Union


@dataclass
class VerseOfTheDay:
    text: str
    reference: str
    version: str

    def to_json(self):
        return {
            "text": self.text,
            "reference": self.reference,
            "version": self.version,
        }


@dataclass
class BibleVerse:
    text: str
    reference: str
    translation: str

    def to_json(self):
        return {
            "text": self.text,
            "reference": self.reference,
            "translation": self.translation,
        }


@dataclass
class ChapterVerse:
    verse_number: int
    text: str

    def to_json(self):
        return {"verseNumber": self.verse_number, "text": self.text}


@dataclass
class Chapter:
    chapter_number: int
    verses: List[ChapterVerse] = field(default_factory=list)

    def to_json(self):
        return {
            "chapterNumber": self.chapter_number,
            "verses": [v.to_json() for v in self.verses],
        }


@dataclass
class Book:
    id: Union[int, str]
    name: str
    short_name: str
    chapter_count: int
    verses_per_chapter: Dict[int, int] = field(default_factory=dict)

    def to_json(self):
        return {
            "id": self.id,
            "name": self.name,
            "shortName": self.short_name,
            "chapterCount": self.chapter_count,
            "versesPerChapter": {str(k): v for k, v in self.verses_per_chapter.items()},
        }


@dataclass
class SearchResult:
    book: str
    chapter: int
    verse: int
    text: str

    def to_json(self):
        return {
            "book": self.book,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }
