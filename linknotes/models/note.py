"""Note model."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Final

from sqlalchemy import DateTime, LargeBinary, String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from linknotes.db import Base


def new_note_id() -> str:
    """
    Generate a fresh note identifier.

    Returns:
        A 32 character hex string

    """
    return uuid.uuid4().hex


class Note(Base):
    """
    Represents a single note: its plain text plus an optional serialized
    rich document that carries styling, links and inline images.
    """

    __tablename__ = "notes"

    #: Maximum length of :attr:`title`.
    TITLE_LENGTH: Final[int] = 80

    #: The note ID.
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_note_id)
    #: The plain text content of the note.
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    #: The serialized rich document, see :mod:`linknotes.richtext.codec`.
    rich_content: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    #: The date and time the note was first saved with content.
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, index=True
    )
    #: The date and time the note content was last saved.
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Note id={self.id!r} title={self.title!r}>"

    @property
    def title(self) -> str:
        """
        The first non-blank line of the note text, shortened to
        :attr:`TITLE_LENGTH` characters.
        """
        for line in (self.text or "").splitlines():
            line = line.strip()  # noqa: PLW2901
            if line:
                if len(line) > self.TITLE_LENGTH:
                    return line[: self.TITLE_LENGTH - 1].rstrip() + "…"
                return line
        return ""

    @classmethod
    def get(cls, session: Session, note_id: str) -> Note | None:
        """
        Get a note by ID.

        Args:
            session: SQLAlchemy session
            note_id: Note ID

        Returns:
            Note or None if not found

        """
        return session.get(cls, note_id)

    @classmethod
    def list(cls, session: Session) -> list[Note]:
        """
        List all notes, most recently created first.  Notes without a
        creation date sort last.

        Args:
            session: SQLAlchemy session

        Returns:
            List of notes

        """
        stmt = select(cls).order_by(cls.created_at.desc().nulls_last(), cls.id)
        return list(session.scalars(stmt).all())
