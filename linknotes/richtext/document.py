"""In-memory styled text with links and inline images."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True)
class Font:
    """A font family and point size."""

    #: The font family name.
    family: str = "Helvetica"
    #: The point size.
    size: float = 17.0


@dataclass(frozen=True)
class TextAttributes:
    """The display attributes shared by every character of a :class:`Span`."""

    #: The font, or None for the renderer's default.
    font: Font | None = None
    #: The text color as ``#RRGGBB``, or None for the renderer's default.
    color: str | None = None
    #: The link target, or None if the text is not a link.
    link: str | None = None


@dataclass(frozen=True)
class Span:
    """A contiguous range ``[start, end)`` of text sharing the same attributes."""

    #: Offset of the first character.
    start: int
    #: Offset one past the last character.
    end: int
    #: The attributes of the range.
    attributes: TextAttributes = field(default_factory=TextAttributes)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def link(self) -> str | None:
        return self.attributes.link


@dataclass(frozen=True)
class ImageAttachment:
    """An image embedded in the document at a text offset."""

    #: The text offset the image is anchored at.
    offset: int
    #: The raw image bytes.
    data: bytes
    #: The MIME type of :attr:`data`.
    mime_type: str = "image/png"
    #: An optional file name.
    name: str | None = None


def coalesce_spans(spans: Iterable[Span]) -> list[Span]:
    """
    Drop empty spans and merge neighbours that share the same attributes.

    Args:
        spans: Spans in text order

    Returns:
        The coalesced spans

    """
    result: list[Span] = []
    for span in spans:
        if span.length <= 0:
            continue
        if (
            result
            and result[-1].end == span.start
            and result[-1].attributes == span.attributes
        ):
            result[-1] = Span(result[-1].start, span.end, span.attributes)
        else:
            result.append(span)
    return result


class AnnotatedDocument:
    """
    A text buffer with styled spans and inline images.

    The spans always tile the whole text: they are ordered, contiguous and do
    not overlap, and neighbouring spans never have equal attributes.

    Args:
        text: The plain text

    Keyword Args:
        spans: Spans covering the text.  If not given, the whole text is one
            span with default attributes.
        images: Inline images

    Raises:
        ValueError: If the spans do not tile the text or an image is anchored
            outside of it

    """

    def __init__(
        self,
        text: str = "",
        spans: Iterable[Span] | None = None,
        images: Iterable[ImageAttachment] | None = None,
    ) -> None:
        #: The plain text.
        self.text = text
        if spans is None:
            spans = [Span(0, len(text))]
        self._spans = coalesce_spans(spans)
        self._check_spans()
        self._images: list[ImageAttachment] = []
        for image in images or []:
            self.add_image(image)

    def _check_spans(self) -> None:
        position = 0
        for span in self._spans:
            if span.start != position:
                msg = f"Span {span.start}-{span.end} does not start at {position}"
                raise ValueError(msg)
            position = span.end
        if position != len(self.text):
            msg = (
                f"Spans end at {position} but the text has "
                f"{len(self.text)} characters"
            )
            raise ValueError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotatedDocument):
            return NotImplemented
        return (
            self.text == other.text
            and self._spans == other._spans
            and self._images == other._images
        )

    def __len__(self) -> int:
        return len(self.text)

    def __iter__(self) -> Iterator[Span]:
        return iter(self._spans)

    def __repr__(self) -> str:
        return (
            f"<AnnotatedDocument text={self.text!r} spans={len(self._spans)} "
            f"images={len(self._images)}>"
        )

    @property
    def plain_text(self) -> str:
        """
        The plain-text projection of the document.
        """
        return self.text

    @property
    def spans(self) -> tuple[Span, ...]:
        return tuple(self._spans)

    @property
    def link_spans(self) -> list[Span]:
        """
        The spans that carry a link.
        """
        return [span for span in self._spans if span.link is not None]

    @property
    def images(self) -> tuple[ImageAttachment, ...]:
        return tuple(self._images)

    def span_text(self, span: Span) -> str:
        return self.text[span.start : span.end]

    def attributes_at(self, index: int) -> TextAttributes:
        """
        Get the attributes of the character at ``index``.

        Args:
            index: Character offset

        Raises:
            IndexError: If ``index`` is outside the text

        Returns:
            The attributes

        """
        if not 0 <= index < len(self.text):
            msg = f"Index {index} out of range"
            raise IndexError(msg)
        for span in self._spans:
            if span.start <= index < span.end:
                return span.attributes
        msg = f"Index {index} out of range"  # pragma: no cover
        raise IndexError(msg)  # pragma: no cover

    def has_link(self, start: int, end: int) -> bool:
        """
        Check whether any character in ``[start, end)`` carries a link.
        """
        return any(
            span.link is not None and span.start < end and start < span.end
            for span in self._spans
        )

    def update_attributes(self, start: int, end: int, **changes: Any) -> None:
        """
        Change attributes on the range ``[start, end)``, splitting spans at
        the range boundaries.  Attributes not named in ``changes`` are kept.

        Args:
            start: Offset of the first character
            end: Offset one past the last character

        Keyword Args:
            font: New :class:`Font`
            color: New color
            link: New link target

        Raises:
            ValueError: If the range is not inside the text

        """
        if not 0 <= start <= end <= len(self.text):
            msg = f"Range {start}-{end} is outside the text"
            raise ValueError(msg)
        if start == end:
            return
        updated: list[Span] = []
        for span in self._spans:
            if span.end <= start or span.start >= end:
                updated.append(span)
                continue
            if span.start < start:
                updated.append(Span(span.start, start, span.attributes))
            updated.append(
                Span(
                    max(span.start, start),
                    min(span.end, end),
                    replace(span.attributes, **changes),
                )
            )
            if span.end > end:
                updated.append(Span(end, span.end, span.attributes))
        self._spans = coalesce_spans(updated)

    def add_image(self, image: ImageAttachment) -> None:
        """
        Embed an image, keeping images ordered by offset.

        Raises:
            ValueError: If the image offset is outside the text

        """
        if not 0 <= image.offset <= len(self.text):
            msg = f"Image offset {image.offset} is outside the text"
            raise ValueError(msg)
        self._images.append(image)
        self._images.sort(key=lambda img: img.offset)

    def copy(self) -> AnnotatedDocument:
        return AnnotatedDocument(self.text, self._spans, self._images)
