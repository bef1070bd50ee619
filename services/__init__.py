"""
Services module for the book status tracker.
Contains business logic separated from HTTP handling for testability.
"""

from .book_status import exists_book, insert_new_book_by_status
from .catalog import get_or_create_aladin_book
from .stamps import list_calendar_stamps

__all__ = [
    'exists_book',
    'insert_new_book_by_status',
    'get_or_create_aladin_book',
    'list_calendar_stamps',
]
