"""The note operations offered to the user interface."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from linknotes.exc import DeserializationError, DoesNotExist
from linknotes.richtext.annotator import DisplayMode, LinkAnnotator
from linknotes.richtext.codec import deserialize
from linknotes.services.store import NoteStore

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from linknotes.models.note import Note
    from linknotes.richtext.document import AnnotatedDocument
    from linknotes.settings import NoteSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteSummary:
    """What the note list shows for one note."""

    #: The note ID.
    id: str
    #: The note title.
    title: str
    #: When the note was first saved.
    created_at: datetime | None


@dataclass
class OpenedNote:
    """A note together with its document, ready for the editor."""

    #: The note.
    note: Note
    #: The document styled for display.
    document: AnnotatedDocument


class NotesService:
    """
    List, open, create, save and delete notes.

    Every method that changes notes writes them immediately.

    Args:
        session: SQLAlchemy session

    Keyword Args:
        annotator: The annotator for documents.  If None, one is built from
            ``settings`` (or from the defaults if ``settings`` is None too).
        display_mode: The display mode documents are styled for
        settings: User preferences

    """

    def __init__(
        self,
        session: Session,
        annotator: LinkAnnotator | None = None,
        display_mode: DisplayMode = DisplayMode.LIGHT,
        settings: NoteSettings | None = None,
    ) -> None:
        #: The note store.
        self.store = NoteStore(session)
        if annotator is None:
            if settings is not None:
                annotator = LinkAnnotator(
                    font=settings.font(), palette=settings.palette()
                )
            else:
                annotator = LinkAnnotator()
        #: The annotator for documents.
        self.annotator = annotator
        #: The display mode of the host, never stored.
        self.display_mode = display_mode

    def _get_note(self, note_id: str) -> Note:
        note = self.store.get(note_id)
        if note is None:
            raise DoesNotExist("Note", note_id)
        return note

    def list_notes(self) -> list[NoteSummary]:
        """
        Get the summaries of every saved note, most recent first.

        Returns:
            The summaries

        """
        return [
            NoteSummary(id=note.id, title=note.title, created_at=note.created_at)
            for note in self.store.fetch_all()
        ]

    def open_note(
        self, note_id: str, display_mode: DisplayMode | None = None
    ) -> OpenedNote:
        """
        Get a note and its document styled for display.

        If the stored document cannot be read, the plain text is used
        instead.

        Args:
            note_id: Note ID

        Keyword Args:
            display_mode: Overrides :attr:`display_mode`

        Raises:
            DoesNotExist: If there is no such note

        Returns:
            The note and its document

        """
        note = self._get_note(note_id)
        mode = display_mode or self.display_mode
        source: str | AnnotatedDocument = note.text
        if note.rich_content:
            try:
                source = deserialize(note.rich_content)
            except DeserializationError:
                logger.exception(
                    f"Stored document of note {note.id} is unreadable, "
                    "showing plain text"
                )
        return OpenedNote(note=note, document=self.annotator.annotate(source, mode))

    def new_note(self) -> Note:
        """
        Create a note.  It is written when it is saved with content.

        Returns:
            The new note

        """
        return self.store.create()

    def save_note(
        self,
        note_id: str,
        plain_text: str,
        document: AnnotatedDocument | None = None,
    ) -> None:
        """
        Set the content of a note and write it.  Saving empty text deletes the
        note.

        Args:
            note_id: Note ID
            plain_text: The text from the editor

        Keyword Args:
            document: The rich document from the editor, if any

        Raises:
            DoesNotExist: If there is no such note
            ValueError: If ``document`` does not hold ``plain_text``
            OutOfSpace: If the disk or database is full
            StorageWriteError: If the note could not be written

        """
        note = self._get_note(note_id)
        source: str | AnnotatedDocument = plain_text if document is None else document
        annotated = self.annotator.annotate(source, self.display_mode)
        self.store.update(note, plain_text, annotated)
        self.store.save()

    def delete_note(self, note_id: str) -> None:
        """
        Delete a note and write the change.  Unknown notes are ignored.

        Args:
            note_id: Note ID

        Raises:
            OutOfSpace: If the disk or database is full
            StorageWriteError: If the change could not be written

        """
        note = self.store.get(note_id)
        if note is None:
            logger.debug(f"Note {note_id} does not exist, nothing to delete")
            return
        self.store.delete(note)
        self.store.save()
