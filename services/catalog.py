"""
Catalog entries (AladinBook) lookup and upsert.

Catalog rows hold the external bibliographic metadata for a title and are
shared by every member who tracks that title. Functions here do NOT commit;
the caller owns the transaction.
"""

import logging
import re
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from models import AladinBook

logger = logging.getLogger(__name__)

_ISBN13_RE = re.compile(r"^\d{13}$")


def normalize_isbn13(isbn: Optional[str]) -> Optional[str]:
    """
    Normalize an ISBN-13 by removing hyphens and spaces.

    Returns:
        The 13-digit string, or None if the input is empty or not ISBN-13 shaped

    Example:
        >>> normalize_isbn13("978-89-7012-345-6")
        "9788970123456"
    """
    if not isbn:
        return None

    normalized = isbn.replace("-", "").replace(" ", "").strip()
    if not _ISBN13_RE.match(normalized):
        logger.warning(f"Invalid ISBN-13 format after normalization: {isbn} -> {normalized}")
        return None

    return normalized


def find_aladin_book(db: Session, isbn13: str) -> Optional[AladinBook]:
    normalized = normalize_isbn13(isbn13)
    if not normalized:
        return None
    book = db.query(AladinBook).filter(AladinBook.isbn13 == normalized).first()
    if book:
        logger.debug(f"Found catalog entry for ISBN-13 {normalized} (id: {book.id})")
    return book


def get_or_create_aladin_book(db: Session, data: Dict[str, Any]) -> AladinBook:
    """
    Get the catalog entry for ``data['isbn13']`` or create it from ``data``.

    Existing entries are returned unchanged; catalog metadata is not
    overwritten by later requests.

    Raises:
        ValueError: If the ISBN-13 is missing or malformed, or the title is empty
    """
    isbn13 = normalize_isbn13(data.get("isbn13"))
    if not isbn13:
        raise ValueError(f"A valid ISBN-13 is required: {data.get('isbn13')!r}")

    existing = find_aladin_book(db, isbn13)
    if existing:
        return existing

    title = (data.get("title") or "").strip()
    if not title:
        raise ValueError(f"Title is required to create catalog entry {isbn13}")

    aladin_book = AladinBook(
        isbn13=isbn13,
        title=title,
        author=data.get("author"),
        publisher=data.get("publisher"),
        cover=data.get("cover"),
        pages_count=data.get("pages_count") or 0,
    )
    db.add(aladin_book)
    db.flush()

    logger.info(f"Created catalog entry: {title} (id: {aladin_book.id}, ISBN-13: {isbn13})")
    return aladin_book
