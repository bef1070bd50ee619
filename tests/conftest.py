import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  register tables on Base.metadata
from database import Base, get_db
from main import app
from models import AladinBook, Member


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def member(db):
    member = Member(email="reader@example.com", nickname="reader")
    db.add(member)
    db.commit()
    return member


@pytest.fixture
def aladin_book(db):
    book = AladinBook(
        isbn13="9788936434120",
        title="The Little Prince",
        author="Antoine de Saint-Exupery",
        publisher="Mirae",
        pages_count=300,
    )
    db.add(book)
    db.commit()
    return book


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
