"""
SQLAlchemy ORM models for the book status tracker.

Tables:
- members: the acting users
- aladin_books: catalog metadata fetched from the Aladin book catalog
- books: a member's reading record for one title (unique per member + ISBN-13)
- calendar_stamps: append-only log of status changes, one row per change
"""

import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base


class BookStatus(str, enum.Enum):
    """Reading status of a member's book."""

    WISH = "WISH"
    READING = "READING"
    COMPLETED = "COMPLETED"
    STOPPED = "STOPPED"


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    nickname = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    books = relationship("Book", back_populates="member")
    calendar_stamps = relationship("CalendarStamp", back_populates="member")

    def __repr__(self):
        return f"<Member {self.id}: {self.nickname}>"


class AladinBook(Base):
    __tablename__ = "aladin_books"

    id = Column(Integer, primary_key=True, index=True)
    isbn13 = Column(String(13), unique=True, nullable=False, index=True)
    title = Column(String(500), nullable=False)
    author = Column(String(255))
    publisher = Column(String(255))
    cover = Column(String(1000))
    pages_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<AladinBook {self.isbn13}: {self.title}>"


class Book(Base):
    __tablename__ = "books"
    __table_args__ = (
        UniqueConstraint("member_id", "isbn13", name="uq_books_member_isbn13"),
    )

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    aladin_book_id = Column(Integer, ForeignKey("aladin_books.id"), nullable=False)
    isbn13 = Column(String(13), nullable=False)

    status = Column(Enum(BookStatus, name="book_status"), nullable=False)
    my_rating = Column(Float)
    one_line_review = Column(Text)
    current_page = Column(Integer)
    start_date = Column(Date)
    finish_date = Column(Date)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    member = relationship("Member", back_populates="books")
    aladin_book = relationship("AladinBook")
    calendar_stamps = relationship("CalendarStamp", back_populates="book")

    def __repr__(self):
        return f"<Book {self.id}: member {self.member_id} - {self.isbn13} ({self.status})>"


class CalendarStamp(Base):
    __tablename__ = "calendar_stamps"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    record_date = Column(Date, nullable=False, index=True)
    status = Column(Enum(BookStatus, name="book_status"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    member = relationship("Member", back_populates="calendar_stamps")
    book = relationship("Book", back_populates="calendar_stamps")

    def __repr__(self):
        return f"<CalendarStamp {self.record_date} member {self.member_id}: {self.status}>"
