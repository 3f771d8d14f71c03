"""LinkNotes: a note store with rich text and automatic link detection."""

__version__ = "0.1.0"
