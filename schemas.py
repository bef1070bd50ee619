"""
Pydantic request/response schemas for the book status API.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import BookStatus


# ============================================================================
# CATALOG
# ============================================================================

class AladinBookRequest(BaseModel):
    """Catalog metadata for a title, as returned by the Aladin search API."""
    isbn13: str = Field(..., min_length=10, max_length=17)
    title: str = Field(..., min_length=1, max_length=500)
    author: Optional[str] = None
    publisher: Optional[str] = None
    cover: Optional[str] = None
    pages_count: int = Field(0, ge=0)


class AladinBookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    isbn13: str
    title: str
    author: Optional[str] = None
    publisher: Optional[str] = None
    cover: Optional[str] = None
    pages_count: int


# ============================================================================
# BOOK STATUS
# ============================================================================

class BookStatusRequest(BaseModel):
    """Status-specific fields; which ones are used depends on the status tab."""
    my_rating: Optional[float] = Field(None, ge=0, le=5)
    one_line_review: Optional[str] = Field(None, max_length=500)
    current_page: Optional[int] = Field(None, ge=0)
    start_date: Optional[date] = None
    finish_date: Optional[date] = None


class BookInsertRequest(BookStatusRequest):
    aladin_book: AladinBookRequest


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    member_id: int
    isbn13: str
    status: BookStatus
    my_rating: Optional[float] = None
    one_line_review: Optional[str] = None
    current_page: Optional[int] = None
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    aladin_book: AladinBookResponse


class BookExistsResponse(BaseModel):
    member_id: int
    isbn13: str
    exists: bool


# ============================================================================
# CALENDAR
# ============================================================================

class CalendarStampResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    book_id: int
    record_date: date
    status: BookStatus
    created_at: datetime


class CalendarStampListResponse(BaseModel):
    member_id: int
    year: int
    month: int
    stamps: List[CalendarStampResponse]


class ErrorResponse(BaseModel):
    detail: str
