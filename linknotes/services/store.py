"""Persistence of notes through a SQLAlchemy session."""

from __future__ import annotations

import errno
import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from linknotes.exc import (
    DoesNotExist,
    OutOfSpace,
    StorageReadError,
    StorageWriteError,
)
from linknotes.models.note import Note, new_note_id
from linknotes.richtext.codec import serialize

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from linknotes.richtext.document import AnnotatedDocument

logger = logging.getLogger(__name__)


class RecordStatus(StrEnum):
    """Where a note stands relative to the store's pending batch."""

    #: Created, not saved yet.
    NEW = "new"
    #: Saved and unchanged since.
    CLEAN = "clean"
    #: Saved, with unsaved changes.
    DIRTY = "dirty"
    #: Deleted, either pending or saved.
    DELETED = "deleted"
    #: Not registered with this store.
    DETACHED = "detached"


def is_out_of_space(error: BaseException) -> bool:
    """
    Check whether ``error`` (or anything in its cause chain) means the disk
    or the database is full.

    Args:
        error: The error to check

    Returns:
        True if storage ran out of space

    """
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, OSError) and current.errno == errno.ENOSPC:
            return True
        if getattr(current, "sqlite_errorcode", None) == sqlite3.SQLITE_FULL:
            return True
        message = str(current).lower()
        if "disk is full" in message or "no space left" in message:
            return True
        current = getattr(current, "orig", None) or current.__cause__
    return False


def _note_id(note: Note) -> str:
    """
    Get the ID of a note without loading expired attributes.
    """
    identity = inspect(note).identity
    if identity:
        return identity[0]
    return note.id


class NoteStore:
    """
    Creates, reads, changes and deletes notes.

    Changes are collected in the session and written together by
    :meth:`save`.  The store is not thread-safe.

    Args:
        session: SQLAlchemy session

    Keyword Args:
        clock: Returns the current time; used for ``created_at`` and
            ``updated_at``

    """

    def __init__(
        self, session: Session, clock: Callable[[], datetime] = datetime.now
    ) -> None:
        #: The SQLAlchemy session.
        self.session = session
        #: Returns the current time.
        self.clock = clock

    def status(self, note: Note) -> RecordStatus:
        """
        Get the status of ``note`` in this store.

        Args:
            note: The note

        Returns:
            The status

        """
        state = inspect(note)
        if note in self.session.deleted or state.deleted or state.was_deleted:
            return RecordStatus.DELETED
        if state.session is not self.session:
            return RecordStatus.DETACHED
        if state.pending:
            return RecordStatus.NEW
        if self.session.is_modified(note):
            return RecordStatus.DIRTY
        return RecordStatus.CLEAN

    def create(self) -> Note:
        """
        Create an empty note.  It is written by the next :meth:`save` once it
        has content.

        Returns:
            The new note

        """
        note = Note(id=new_note_id(), text="")
        self.session.add(note)
        logger.debug(f"Created note {note.id}")
        return note

    def get(self, note_id: str) -> Note | None:
        """
        Get a note by ID, including notes created since the last save.

        Args:
            note_id: Note ID

        Returns:
            The note, or None if there is no such note

        """
        for obj in self.session.new:
            if isinstance(obj, Note) and obj.id == note_id:
                return obj
        note = Note.get(self.session, note_id)
        if note is None or note in self.session.deleted:
            return None
        return note

    def fetch_all(self) -> list[Note]:
        """
        Get every saved note, most recently created first.  Notes that were
        never given a creation date sort last.

        A read failure is logged and gives an empty list.

        Returns:
            The notes

        """
        try:
            notes = Note.list(self.session)
        except SQLAlchemyError as e:
            logger.exception(str(StorageReadError(e)))
            return []
        return [note for note in notes if note not in self.session.deleted]

    def update(
        self, note: Note, plain_text: str, document: AnnotatedDocument
    ) -> None:
        """
        Set the content of a note.  Empty ``plain_text`` deletes the note.

        Args:
            note: The note to change
            plain_text: The plain text content
            document: The rich version of ``plain_text``

        Raises:
            DoesNotExist: If the note has been deleted
            ValueError: If the document text differs from ``plain_text``

        """
        if not plain_text:
            self.delete(note)
            return
        status = self.status(note)
        if status == RecordStatus.DELETED:
            raise DoesNotExist("Note", _note_id(note))
        if document.plain_text != plain_text:
            msg = "The document text does not match the plain text"
            raise ValueError(msg)
        if status == RecordStatus.DETACHED:
            self.session.add(note)
        now = self.clock()
        note.text = plain_text
        note.rich_content = serialize(document)
        if note.created_at is None:
            note.created_at = now
        note.updated_at = now

    def delete(self, note: Note) -> None:
        """
        Delete a note.  Deleting a note that is already deleted, or that
        does not belong to this store, does nothing.

        Args:
            note: The note to delete

        """
        status = self.status(note)
        if status == RecordStatus.NEW:
            self.session.expunge(note)
        elif status in (RecordStatus.CLEAN, RecordStatus.DIRTY):
            self.session.delete(note)
        else:
            logger.debug(f"Note {_note_id(note)} is {status}, nothing to delete")
            return
        logger.debug(f"Deleted note {note.id}")

    def _drop_empty_notes(self) -> None:
        """
        Make sure no note is written with empty text.
        """
        for obj in list(self.session.new):
            if isinstance(obj, Note) and not obj.text:
                self.session.expunge(obj)
        for obj in list(self.session.dirty):
            if isinstance(obj, Note) and not obj.text:
                self.session.delete(obj)

    def _changed_values(self, note: Note) -> dict[str, Any]:
        state = inspect(note)
        return {
            key: getattr(note, key)
            for key in state.mapper.column_attrs.keys()  # noqa: SIM118
            if state.attrs[key].history.has_changes()
        }

    def save(self) -> None:
        """
        Write every pending create, update and delete in one transaction.

        On failure nothing is written and the pending changes are kept, so
        the save can be repeated.

        Raises:
            OutOfSpace: If the disk or database is full
            StorageWriteError: If the write failed for any other reason

        """
        self._drop_empty_notes()
        new = list(self.session.new)
        deleted = list(self.session.deleted)
        dirty = {
            obj: self._changed_values(obj)
            for obj in self.session.dirty
            if isinstance(obj, Note)
        }
        try:
            self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            self.session.rollback()
            self._restage(new, deleted, dirty)
            error = OutOfSpace(e) if is_out_of_space(e) else StorageWriteError(e)
            logger.error(str(error))  # noqa: TRY400
            raise error from e
        logger.info(
            f"Saved notes: {len(new)} new, {len(dirty)} changed, "
            f"{len(deleted)} deleted"
        )

    def _restage(
        self,
        new: list[Any],
        deleted: list[Any],
        dirty: dict[Note, dict[str, Any]],
    ) -> None:
        """
        Put the changes of a failed save back into the session.
        """
        for obj in new:
            self.session.add(obj)
        for obj in deleted:
            if inspect(obj).persistent:
                self.session.delete(obj)
        for note, values in dirty.items():
            for key, value in values.items():
                setattr(note, key, value)

    def discard(self) -> None:
        """
        Throw away every pending change.
        """
        self.session.rollback()
