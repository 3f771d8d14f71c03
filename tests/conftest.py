"""Shared pytest fixtures and test helpers for LinkNotes tests."""

from datetime import datetime, timedelta

import pytest
from PySide6.QtCore import QSettings
from sqlalchemy.orm import sessionmaker

import linknotes.models  # noqa: F401
from linknotes.db import Base, create_engine_with_path
from linknotes.services.notes import NotesService
from linknotes.services.store import NoteStore


class FakeClock:
    """A clock that moves forward by ``step`` every time it is read."""

    def __init__(
        self,
        start: datetime = datetime(2025, 9, 6, 12, 0, 0),
        step: timedelta = timedelta(minutes=1),
    ):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def db_engine(tmp_path):
    """Create a temporary database with the LinkNotes schema."""
    engine = create_engine_with_path(tmp_path / "notes.db")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """A session factory bound to the temporary database."""
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """Create a session on the temporary database."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(db_session, clock):
    return NoteStore(db_session, clock=clock)


@pytest.fixture
def service(db_session, clock):
    service = NotesService(db_session)
    service.store.clock = clock
    return service


@pytest.fixture
def qsettings(tmp_path):
    """A settings store in a temporary ini file."""
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
