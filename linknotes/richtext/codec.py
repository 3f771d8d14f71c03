"""
Serialization of :class:`~linknotes.richtext.document.AnnotatedDocument`
objects to the self-describing blob stored in ``Note.rich_content``.

The blob is UTF-8 encoded JSON::

    {
        "format": "linknotes.richtext",
        "version": 1,
        "text": "see http://example.com",
        "spans": [
            {"start": 0, "end": 4, "font": {"family": "Helvetica", "size": 17.0},
             "color": "#000000", "link": null},
            ...
        ],
        "images": [
            {"offset": 4, "mime_type": "image/png", "name": null, "data": "<base64>"}
        ]
    }
"""

import base64
import binascii
import json
from typing import Any, Final

from linknotes.exc import DeserializationError
from linknotes.richtext.document import (
    AnnotatedDocument,
    Font,
    ImageAttachment,
    Span,
    TextAttributes,
)

#: The format tag written to every blob.
FORMAT_NAME: Final[str] = "linknotes.richtext"
#: The newest format version this module reads and the one it writes.
FORMAT_VERSION: Final[int] = 1


def _entries(payload: dict[str, Any], key: str) -> list[dict[str, Any]]:
    entries = payload.get(key, [])
    if not isinstance(entries, list) or not all(
        isinstance(entry, dict) for entry in entries
    ):
        msg = f"{key} must be a list of objects"
        raise TypeError(msg)
    return entries


def _span_to_json(span: Span) -> dict[str, Any]:
    attributes = span.attributes
    font = None
    if attributes.font is not None:
        font = {"family": attributes.font.family, "size": attributes.font.size}
    return {
        "start": span.start,
        "end": span.end,
        "font": font,
        "color": attributes.color,
        "link": attributes.link,
    }


def _span_from_json(data: dict[str, Any]) -> Span:
    font = None
    if data.get("font") is not None:
        font = Font(
            family=str(data["font"]["family"]), size=float(data["font"]["size"])
        )
    return Span(
        start=int(data["start"]),
        end=int(data["end"]),
        attributes=TextAttributes(
            font=font, color=data.get("color"), link=data.get("link")
        ),
    )


def _image_to_json(image: ImageAttachment) -> dict[str, Any]:
    return {
        "offset": image.offset,
        "mime_type": image.mime_type,
        "name": image.name,
        "data": base64.b64encode(image.data).decode("ascii"),
    }


def _image_from_json(data: dict[str, Any]) -> ImageAttachment:
    return ImageAttachment(
        offset=int(data["offset"]),
        data=base64.b64decode(data["data"], validate=True),
        mime_type=str(data.get("mime_type", "image/png")),
        name=data.get("name"),
    )


def serialize(document: AnnotatedDocument) -> bytes:
    """
    Serialize a document to a rich-document blob.

    Args:
        document: The document to serialize

    Returns:
        The blob

    """
    payload = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "text": document.text,
        "spans": [_span_to_json(span) for span in document.spans],
        "images": [_image_to_json(image) for image in document.images],
    }
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def deserialize(blob: bytes) -> AnnotatedDocument:
    """
    Read a document from a rich-document blob.

    Args:
        blob: Bytes produced by :func:`serialize`

    Raises:
        DeserializationError: If the blob is not a readable rich document

    Returns:
        The document

    """
    try:
        payload = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DeserializationError(e) from e
    if not isinstance(payload, dict) or payload.get("format") != FORMAT_NAME:
        msg = "not a rich document"
        raise DeserializationError(msg)
    version = payload.get("version")
    if not isinstance(version, int) or version > FORMAT_VERSION:
        msg = f"unsupported version {version!r}"
        raise DeserializationError(msg)
    try:
        text = payload["text"]
        if not isinstance(text, str):
            msg = "text must be a string"
            raise TypeError(msg)
        return AnnotatedDocument(
            text,
            spans=[_span_from_json(span) for span in _entries(payload, "spans")],
            images=[
                _image_from_json(image) for image in _entries(payload, "images")
            ],
        )
    except (KeyError, TypeError, ValueError, binascii.Error) as e:
        raise DeserializationError(e) from e
