# This file makes the models directory a Python package
from .user import User, Account
from .favorite import Favorite
from .note import Note

__all__ = [
    'User',
    'Account',
    'Favorite',
    'Note',
]
