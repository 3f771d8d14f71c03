"""Services package initialization."""

from linknotes.services.notes import NoteSummary, NotesService, OpenedNote
from linknotes.services.store import NoteStore, RecordStatus

__all__ = [
    "NoteStore",
    "NoteSummary",
    "NotesService",
    "OpenedNote",
    "RecordStatus",
]
