"""
Book Status Service
Records a member's reading status for a title and stamps the calendar log.

Workflow for ``insert_new_book_by_status``:
1. Resolve the member (MemberNotFoundError if absent)
2. Parse the status tab into a BookStatus (InvalidBookStatusError if unknown)
3. Build the full set of field values for that status (unset ones are None)
4. Apply them to the member's record for the ISBN-13, creating it if needed,
   so a status change replaces every field of the previous status
5. Append exactly one calendar stamp dated today with the resulting status

Nothing is committed here; the caller owns the transaction so the record
write and the stamp write land together or not at all. No transition graph
is enforced: any status can follow any other.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import AladinBook, Book, BookStatus
from schemas import BookStatusRequest
from services.exceptions import BookServiceError, InvalidBookStatusError
from services.stamps import get_member, record_calendar_stamp

logger = logging.getLogger(__name__)


def _today() -> date:
    return date.today()


def parse_status(tab_condition: Optional[str]) -> BookStatus:
    """Match a status tab case-insensitively against BookStatus."""
    normalized = (tab_condition or "").strip().upper()
    try:
        return BookStatus[normalized]
    except KeyError:
        raise InvalidBookStatusError(tab_condition) from None


# ============================================================================
# STATUS FIELD BUILDERS
# ============================================================================

def _wish_fields(request: BookStatusRequest, aladin_book: AladinBook, today: date) -> Dict[str, Any]:
    return {"status": BookStatus.WISH}


def _reading_fields(request: BookStatusRequest, aladin_book: AladinBook, today: date) -> Dict[str, Any]:
    return {
        "status": BookStatus.READING,
        "my_rating": request.my_rating,
        "current_page": request.current_page,
        "start_date": today,
    }


def _completed_fields(request: BookStatusRequest, aladin_book: AladinBook, today: date) -> Dict[str, Any]:
    return {
        "status": BookStatus.COMPLETED,
        "my_rating": request.my_rating,
        "one_line_review": request.one_line_review,
        # finished means 100%
        "current_page": aladin_book.pages_count,
        "start_date": request.start_date,
        "finish_date": request.finish_date,
    }


def _stopped_fields(request: BookStatusRequest, aladin_book: AladinBook, today: date) -> Dict[str, Any]:
    return {
        "status": BookStatus.STOPPED,
        "my_rating": request.my_rating,
        "one_line_review": request.one_line_review,
        "current_page": request.current_page,
        "start_date": request.start_date,
        "finish_date": request.finish_date,
    }


# a status change replaces all of these, not just the ones its builder sets
_STATUS_FIELDS = ("my_rating", "one_line_review", "current_page", "start_date", "finish_date")

_STATUS_BUILDERS: Dict[BookStatus, Callable[[BookStatusRequest, AladinBook, date], Dict[str, Any]]] = {
    BookStatus.WISH: _wish_fields,
    BookStatus.READING: _reading_fields,
    BookStatus.COMPLETED: _completed_fields,
    BookStatus.STOPPED: _stopped_fields,
}


def build_status_fields(
    status: BookStatus,
    request: Optional[BookStatusRequest],
    aladin_book: AladinBook,
    today: date,
) -> Dict[str, Any]:
    """Return every status-dependent field; ones the status does not set are None."""
    fields: Dict[str, Any] = dict.fromkeys(_STATUS_FIELDS)
    fields.update(_STATUS_BUILDERS[status](request or BookStatusRequest(), aladin_book, today))
    return fields


# ============================================================================
# PUBLIC API
# ============================================================================

def find_member_book(db: Session, member_id: int, isbn13: str) -> Optional[Book]:
    return db.query(Book).filter(
        Book.member_id == member_id,
        Book.isbn13 == isbn13,
    ).first()


def exists_book(db: Session, member_id: int, isbn13: str) -> bool:
    """
    Check whether the member already tracks the title.

    Raises:
        MemberNotFoundError: If the member does not exist
    """
    member = get_member(db, member_id)
    return find_member_book(db, member.id, isbn13) is not None


def insert_new_book_by_status(
    db: Session,
    member_id: int,
    tab_condition: str,
    aladin_book: AladinBook,
    request: Optional[BookStatusRequest] = None,
) -> Book:
    """
    Set the member's reading status for a catalog entry.

    Args:
        db: Database session (transaction will be committed by caller)
        member_id: ID of the acting member
        tab_condition: Status tab, one of WISH/READING/COMPLETED/STOPPED (any case)
        aladin_book: Catalog entry for the title
        request: Rating, review, page and dates supplied by the member

    Returns:
        The saved Book record

    Raises:
        MemberNotFoundError: If the member does not exist
        InvalidBookStatusError: If the status tab is not recognised
        SQLAlchemyError: On database errors
    """
    logger.info(f"Recording status '{tab_condition}' for member {member_id}, ISBN-13 {aladin_book.isbn13}")

    try:
        member = get_member(db, member_id)
        status = parse_status(tab_condition)
        today = _today()

        fields = build_status_fields(status, request, aladin_book, today)

        book = find_member_book(db, member.id, aladin_book.isbn13)
        if book is None:
            book = Book(
                member=member,
                aladin_book=aladin_book,
                isbn13=aladin_book.isbn13,
            )
            db.add(book)
        else:
            logger.info(f"Member {member.id} already tracks {aladin_book.isbn13} (book_id: {book.id}), updating")

        for name, value in fields.items():
            setattr(book, name, value)
        db.flush()

        record_calendar_stamp(db, member, book, today)

        logger.info(f"Saved book {book.id} with status {book.status.value} for member {member.id}")
        return book

    except BookServiceError as e:
        logger.warning(f"Rejected status request for member {member_id}: {e}")
        raise

    except SQLAlchemyError as e:
        logger.error(f"Database error saving status for member {member_id}: {str(e)}")
        raise
