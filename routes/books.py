"""
Book status routes.
Thin HTTP wrapper around services/book_status.py: validation, error
responses and the per-request transaction (one commit for record + stamp).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from schemas import (
    BookExistsResponse,
    BookInsertRequest,
    BookResponse,
    BookStatusRequest,
    CalendarStampListResponse,
    CalendarStampResponse,
    ErrorResponse,
)
from services.book_status import exists_book, insert_new_book_by_status
from services.catalog import get_or_create_aladin_book, normalize_isbn13
from services.exceptions import MemberNotFoundError
from services.stamps import list_calendar_stamps

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/members/{member_id}",
    tags=["Books"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad request"},
        404: {"model": ErrorResponse, "description": "Member not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


@router.get("/books/exists", response_model=BookExistsResponse)
def check_book_exists(
    member_id: int,
    isbn13: str = Query(..., min_length=10, max_length=17),
    db: Session = Depends(get_db),
):
    """Whether the member already tracks the title."""
    try:
        normalized = normalize_isbn13(isbn13)
        if not normalized:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid ISBN-13: {isbn13}")

        return BookExistsResponse(
            member_id=member_id,
            isbn13=normalized,
            exists=exists_book(db, member_id, normalized),
        )
    except HTTPException:
        raise
    except MemberNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error checking book for member {member_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error while checking book")


@router.post("/books", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def insert_book_by_status(
    member_id: int,
    request: BookInsertRequest,
    tab: str = Query(..., description="WISH, READING, COMPLETED or STOPPED"),
    db: Session = Depends(get_db),
):
    """
    Save the title to the member's shelf under the given status tab.

    The catalog entry is created on first use. The record and its calendar
    stamp are committed together.
    """
    logger.info(f"Received book status request: member={member_id}, tab={tab}, isbn13={request.aladin_book.isbn13}")

    try:
        aladin_book = get_or_create_aladin_book(db, request.aladin_book.model_dump())
        status_request = BookStatusRequest(**request.model_dump(exclude={"aladin_book"}))

        book = insert_new_book_by_status(db, member_id, tab, aladin_book, status_request)
        db.commit()
        db.refresh(book)

        return BookResponse.model_validate(book)

    except MemberNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    except ValueError as e:
        db.rollback()
        logger.warning(f"Validation error for member {member_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error for member {member_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error while saving book")

    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error for member {member_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error while saving book")


@router.get("/calendar", response_model=CalendarStampListResponse)
def get_calendar(
    member_id: int,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """Calendar stamps recorded for the member in one month."""
    try:
        stamps = list_calendar_stamps(db, member_id, year, month)
        return CalendarStampListResponse(
            member_id=member_id,
            year=year,
            month=month,
            stamps=[CalendarStampResponse.model_validate(s) for s in stamps],
        )
    except MemberNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing calendar for member {member_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error while listing calendar")
