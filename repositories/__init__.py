from .owned import OwnedRepository
from models import Favorite, Note

favorite_repo = OwnedRepository(
    Favorite,
    filter_fields=('book', 'chapter'),
    editable_fields=('book', 'chapter', 'verse_number', 'verse_text'),
)

note_repo = OwnedRepository(
    Note,
    filter_fields=('book', 'chapter', 'verse'),
    editable_fields=('book', 'chapter', 'verse', 'content'),
)

__all__ = ['OwnedRepository', 'favorite_repo', 'note_repo']
