"""SQLAlchemy database setup for LinkNotes."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

if TYPE_CHECKING:
    import sqlite3

    from linknotes.settings import NoteSettings

#: The application directory name.
APP_DIR_NAME: Final[str] = "LinkNotes"
#: The default database name.
DEFAULT_DB_NAME: Final[str] = "default.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def get_notes_db_path() -> Path:
    """
    Get the path to the notes database.

    - On Windows, the database is created in the user's
        ``AppData/Local/LinkNotes/notes`` directory.
    - On macOS, the database is created in the user's
        ``~/Library/Application Support/LinkNotes/notes`` directory.
    - On Linux, the database is created in the user's
        ``~/.config/LinkNotes/notes`` directory.
    - If the platform is not supported, raise a ValueError.

    Returns:
        Path to the database file

    """
    if sys.platform not in ["win32", "darwin", "linux"]:
        msg = f"Unsupported platform: {sys.platform}"
        raise ValueError(msg)
    if sys.platform == "win32":
        db_path = Path.home() / "AppData" / "Local" / APP_DIR_NAME / "notes"
    elif sys.platform == "darwin":
        db_path = (
            Path.home() / "Library" / "Application Support" / APP_DIR_NAME / "notes"
        )
    else:
        db_path = Path.home() / ".config" / APP_DIR_NAME / "notes"
    db_path.mkdir(parents=True, exist_ok=True)
    return db_path / DEFAULT_DB_NAME


def create_engine_with_path(db_path: Path | None = None) -> Engine:
    """
    Create SQLAlchemy engine with proper SQLite settings.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy engine

    """
    if db_path is None:
        db_path = get_notes_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path.touch(exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(
        dbapi_conn: sqlite3.Connection | Any, _connection_record: Any
    ) -> None:
        """Set SQLite pragmas on connection."""
        cursor = cast("sqlite3.Cursor", dbapi_conn.cursor())
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


#: Session factory; bound to an engine by :func:`init_db`.
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def init_db(
    db_path: Path | None = None, settings: NoteSettings | None = None
) -> Engine:
    """
    Create the engine, make sure the schema exists and bind
    :data:`SessionLocal` to it.

    Args:
        db_path: Optional path to database file. If None, uses the path
            configured in ``settings``, then the default path.
        settings: Preferences to read the database path from

    Returns:
        SQLAlchemy engine

    """
    # Register the models with the metadata before creating tables
    import linknotes.models  # noqa: F401, PLC0415

    if db_path is None and settings is not None:
        db_path = settings.get_database_path()
    engine = create_engine_with_path(db_path)
    Base.metadata.create_all(engine)
    SessionLocal.configure(bind=engine)
    return engine


def get_session():
    """
    Get a database session.

    Yields:
        SQLAlchemy session

    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
