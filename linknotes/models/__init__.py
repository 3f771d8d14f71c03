"""Data models for LinkNotes."""

from linknotes.models.note import Note

__all__ = ["Note"]
