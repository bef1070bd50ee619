"""
Member lookup and the calendar stamp log.

Stamps are append-only: one row per status set or change, never updated
or deleted.
"""

import calendar
import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from models import Book, CalendarStamp, Member
from services.exceptions import MemberNotFoundError

logger = logging.getLogger(__name__)


def get_member(db: Session, member_id: int) -> Member:
    member = db.query(Member).filter(Member.id == member_id).first()
    if not member:
        raise MemberNotFoundError(member_id)
    logger.debug(f"Resolved member {member_id}: {member.nickname}")
    return member


def record_calendar_stamp(db: Session, member: Member, book: Book, today: date) -> CalendarStamp:
    """Append a stamp for the book's current status. Does NOT commit."""
    stamp = CalendarStamp(
        member=member,
        book=book,
        record_date=today,
        status=book.status,
    )
    db.add(stamp)
    db.flush()

    logger.info(
        f"Calendar stamp recorded: member={member.id}, book={book.id}, "
        f"date={today.isoformat()}, status={book.status.value}"
    )
    return stamp


def list_calendar_stamps(db: Session, member_id: int, year: int, month: int) -> List[CalendarStamp]:
    """
    List a member's stamps within one calendar month, oldest first.

    Raises:
        MemberNotFoundError: If the member does not exist
        ValueError: If month is not in 1..12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12: {month}")

    get_member(db, member_id)

    first_day = date(year, month, 1)
    last_day = date(year, month, calendar.monthrange(year, month)[1])

    return (
        db.query(CalendarStamp)
        .filter(
            CalendarStamp.member_id == member_id,
            CalendarStamp.record_date >= first_day,
            CalendarStamp.record_date <= last_day,
        )
        .order_by(CalendarStamp.record_date.asc(), CalendarStamp.id.asc())
        .all()
    )
