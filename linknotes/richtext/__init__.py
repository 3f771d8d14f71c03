"""Rich text documents, link detection and the stored blob format."""

from linknotes.richtext.annotator import DisplayMode, LinkAnnotator, Palette
from linknotes.richtext.codec import deserialize, serialize
from linknotes.richtext.detector import LinkDetector, LinkMatch, RegexLinkDetector
from linknotes.richtext.document import (
    AnnotatedDocument,
    Font,
    ImageAttachment,
    Span,
    TextAttributes,
)

__all__ = [
    "AnnotatedDocument",
    "DisplayMode",
    "Font",
    "ImageAttachment",
    "LinkAnnotator",
    "LinkDetector",
    "LinkMatch",
    "Palette",
    "RegexLinkDetector",
    "Span",
    "TextAttributes",
    "deserialize",
    "serialize",
]
