from datetime import date

import pytest

from models import Book, BookStatus, CalendarStamp
from schemas import BookStatusRequest
from services import book_status
from services.book_status import (
    build_status_fields,
    exists_book,
    insert_new_book_by_status,
    parse_status,
)
from services.exceptions import InvalidBookStatusError, MemberNotFoundError


@pytest.fixture
def fixed_today(monkeypatch):
    today = date(2026, 10, 19)
    monkeypatch.setattr(book_status, "_today", lambda: today)
    return today


def _stamps(db):
    return db.query(CalendarStamp).order_by(CalendarStamp.id).all()


@pytest.mark.parametrize("tab, expected", [
    ("WISH", BookStatus.WISH),
    ("reading", BookStatus.READING),
    ("Completed", BookStatus.COMPLETED),
    (" stopped ", BookStatus.STOPPED),
])
def test_parse_status_is_case_insensitive(tab, expected):
    assert parse_status(tab) is expected


@pytest.mark.parametrize("tab", ["FOO", "", None, "WISHES"])
def test_parse_status_rejects_unknown_tabs(tab):
    with pytest.raises(InvalidBookStatusError):
        parse_status(tab)


def test_wish_sets_only_status(db, member, aladin_book, fixed_today):
    request = BookStatusRequest(my_rating=5, current_page=10, one_line_review="ignored")

    book = insert_new_book_by_status(db, member.id, "WISH", aladin_book, request)
    db.commit()

    assert book.status == BookStatus.WISH
    assert book.my_rating is None
    assert book.current_page is None
    assert book.one_line_review is None
    assert book.start_date is None
    assert book.finish_date is None

    stamps = _stamps(db)
    assert len(stamps) == 1
    assert stamps[0].status == BookStatus.WISH
    assert stamps[0].record_date == fixed_today
    assert stamps[0].book_id == book.id
    assert stamps[0].member_id == member.id


def test_reading_starts_today(db, member, aladin_book, fixed_today):
    request = BookStatusRequest(my_rating=4, current_page=120, finish_date=date(2026, 1, 1))

    book = insert_new_book_by_status(db, member.id, "reading", aladin_book, request)
    db.commit()

    assert book.status == BookStatus.READING
    assert book.my_rating == 4
    assert book.current_page == 120
    assert book.start_date == fixed_today
    assert book.finish_date is None
    assert [s.status for s in _stamps(db)] == [BookStatus.READING]


def test_completed_forces_current_page_to_page_count(db, member, aladin_book, fixed_today):
    request = BookStatusRequest(
        my_rating=4.5,
        one_line_review="Loved it",
        current_page=12,
        start_date=date(2026, 9, 1),
        finish_date=date(2026, 10, 1),
    )

    book = insert_new_book_by_status(db, member.id, "COMPLETED", aladin_book, request)
    db.commit()

    assert book.status == BookStatus.COMPLETED
    assert book.current_page == 300
    assert book.my_rating == 4.5
    assert book.one_line_review == "Loved it"
    assert book.start_date == date(2026, 9, 1)
    assert book.finish_date == date(2026, 10, 1)


def test_stopped_copies_input_verbatim(db, member, aladin_book, fixed_today):
    request = BookStatusRequest(
        my_rating=2,
        one_line_review="Not for me",
        current_page=45,
        start_date=date(2026, 8, 1),
        finish_date=date(2026, 8, 15),
    )

    book = insert_new_book_by_status(db, member.id, "STOPPED", aladin_book, request)
    db.commit()

    assert book.status == BookStatus.STOPPED
    assert book.my_rating == 2
    assert book.one_line_review == "Not for me"
    assert book.current_page == 45
    assert book.start_date == date(2026, 8, 1)
    assert book.finish_date == date(2026, 8, 15)
    assert _stamps(db)[0].record_date == fixed_today


def test_unknown_tab_writes_nothing(db, member, aladin_book):
    with pytest.raises(InvalidBookStatusError):
        insert_new_book_by_status(db, member.id, "FOO", aladin_book, BookStatusRequest())
    db.commit()

    assert db.query(Book).count() == 0
    assert db.query(CalendarStamp).count() == 0


def test_missing_member_writes_nothing(db, aladin_book):
    with pytest.raises(MemberNotFoundError) as exc_info:
        insert_new_book_by_status(db, 999, "WISH", aladin_book)
    db.commit()

    assert exc_info.value.member_id == 999
    assert db.query(Book).count() == 0
    assert db.query(CalendarStamp).count() == 0


def test_missing_member_is_not_reported_as_invalid_status(db, aladin_book):
    with pytest.raises(MemberNotFoundError):
        insert_new_book_by_status(db, 999, "FOO", aladin_book)


def test_status_change_updates_same_record_and_appends_stamp(db, member, aladin_book, fixed_today):
    first = insert_new_book_by_status(db, member.id, "WISH", aladin_book)
    db.commit()
    second = insert_new_book_by_status(
        db, member.id, "READING", aladin_book, BookStatusRequest(my_rating=3, current_page=50)
    )
    db.commit()

    assert second.id == first.id
    assert db.query(Book).count() == 1
    assert [s.status for s in _stamps(db)] == [BookStatus.WISH, BookStatus.READING]


def test_any_transition_is_allowed(db, member, aladin_book, fixed_today):
    insert_new_book_by_status(db, member.id, "WISH", aladin_book)
    book = insert_new_book_by_status(db, member.id, "COMPLETED", aladin_book, BookStatusRequest())
    db.commit()

    assert book.status == BookStatus.COMPLETED
    assert book.current_page == 300


def test_wish_after_reading_clears_reading_fields(db, member, aladin_book, fixed_today):
    insert_new_book_by_status(
        db, member.id, "READING", aladin_book, BookStatusRequest(my_rating=4, current_page=80)
    )
    book = insert_new_book_by_status(db, member.id, "WISH", aladin_book)
    db.commit()

    assert book.status == BookStatus.WISH
    assert book.my_rating is None
    assert book.one_line_review is None
    assert book.current_page is None
    assert book.start_date is None
    assert book.finish_date is None


def test_reading_after_completed_clears_finish_date(db, member, aladin_book, fixed_today):
    insert_new_book_by_status(
        db, member.id, "COMPLETED", aladin_book,
        BookStatusRequest(one_line_review="Again?", finish_date=date(2026, 2, 1)),
    )
    book = insert_new_book_by_status(
        db, member.id, "READING", aladin_book, BookStatusRequest(current_page=10)
    )
    db.commit()

    assert book.status == BookStatus.READING
    assert book.finish_date is None
    assert book.one_line_review is None
    assert book.current_page == 10
    assert book.start_date == fixed_today


def test_stopped_after_reading_uses_only_stopped_input(db, member, aladin_book, fixed_today):
    insert_new_book_by_status(
        db, member.id, "READING", aladin_book, BookStatusRequest(my_rating=4, current_page=80)
    )
    request = BookStatusRequest(
        one_line_review="Lost interest",
        current_page=95,
        start_date=date(2026, 9, 1),
    )
    book = insert_new_book_by_status(db, member.id, "STOPPED", aladin_book, request)
    db.commit()

    assert book.status == BookStatus.STOPPED
    assert book.my_rating is None
    assert book.one_line_review == "Lost interest"
    assert book.current_page == 95
    assert book.start_date == date(2026, 9, 1)
    assert book.finish_date is None


def test_build_status_fields_without_request(aladin_book):
    fields = build_status_fields(BookStatus.STOPPED, None, aladin_book, date(2026, 1, 1))

    assert fields["status"] == BookStatus.STOPPED
    assert fields["current_page"] is None
    assert fields["finish_date"] is None


def test_exists_book(db, member, aladin_book):
    assert exists_book(db, member.id, aladin_book.isbn13) is False

    insert_new_book_by_status(db, member.id, "WISH", aladin_book)
    db.commit()

    assert exists_book(db, member.id, aladin_book.isbn13) is True
    assert exists_book(db, member.id, "9780000000000") is False


def test_exists_book_missing_member(db):
    with pytest.raises(MemberNotFoundError):
        exists_book(db, 42, "9788936434120")


def test_build_status_fields_wish_resets_every_field(aladin_book):
    fields = build_status_fields(BookStatus.WISH, BookStatusRequest(my_rating=5), aladin_book, date(2026, 1, 1))

    assert fields == {
        "status": BookStatus.WISH,
        "my_rating": None,
        "one_line_review": None,
        "current_page": None,
        "start_date": None,
        "finish_date": None,
    }
