"""Unit tests for AnnotatedDocument."""

import pytest

from linknotes.richtext.document import (
    AnnotatedDocument,
    Font,
    ImageAttachment,
    Span,
    TextAttributes,
    coalesce_spans,
)


class TestCoalesceSpans:
    """Test cases for coalesce_spans()."""

    def test_merges_neighbours_with_equal_attributes(self):
        """Test adjacent spans with the same attributes become one."""
        spans = coalesce_spans([Span(0, 3), Span(3, 5), Span(5, 9)])
        assert spans == [Span(0, 9)]

    def test_drops_empty_spans(self):
        """Test zero-length spans are removed."""
        link = TextAttributes(link="http://example.com")
        spans = coalesce_spans([Span(0, 2), Span(2, 2, link), Span(2, 4)])
        assert spans == [Span(0, 4)]

    def test_keeps_different_attributes_apart(self):
        """Test spans with different attributes are kept separate."""
        link = TextAttributes(link="http://example.com")
        spans = coalesce_spans([Span(0, 2), Span(2, 4, link)])
        assert len(spans) == 2


class TestAnnotatedDocument:
    """Test cases for AnnotatedDocument."""

    def test_default_span_covers_whole_text(self):
        """Test a new document is a single span with default attributes."""
        doc = AnnotatedDocument("hello")
        assert doc.spans == (Span(0, 5, TextAttributes()),)
        assert doc.plain_text == "hello"
        assert len(doc) == 5

    def test_empty_document_has_no_spans(self):
        """Test an empty document has no spans."""
        doc = AnnotatedDocument("")
        assert doc.spans == ()
        assert doc.link_spans == []

    def test_rejects_spans_with_gap(self):
        """Test spans that leave a gap are rejected."""
        with pytest.raises(ValueError, match="does not start"):
            AnnotatedDocument(
                "hello",
                spans=[Span(0, 2), Span(3, 5, TextAttributes(color="#FF0000"))],
            )

    def test_rejects_spans_shorter_than_text(self):
        """Test spans must reach the end of the text."""
        with pytest.raises(ValueError, match="Spans end at 3"):
            AnnotatedDocument("hello", spans=[Span(0, 3)])

    def test_update_attributes_splits_span(self):
        """Test changing the middle of a span splits it in three."""
        doc = AnnotatedDocument("see it now")
        doc.update_attributes(4, 6, link="http://example.com")
        assert [(s.start, s.end, s.link) for s in doc.spans] == [
            (0, 4, None),
            (4, 6, "http://example.com"),
            (6, 10, None),
        ]
        assert doc.span_text(doc.link_spans[0]) == "it"

    def test_update_attributes_keeps_other_attributes(self):
        """Test attributes not named are left as they were."""
        doc = AnnotatedDocument("abcdef")
        doc.update_attributes(0, 6, link="http://example.com")
        doc.update_attributes(0, 6, color="#112233")
        attributes = doc.attributes_at(3)
        assert attributes.link == "http://example.com"
        assert attributes.color == "#112233"

    def test_update_attributes_recoalesces(self):
        """Test spans merge again when their attributes become equal."""
        doc = AnnotatedDocument("abcdef")
        doc.update_attributes(2, 4, color="#FF0000")
        assert len(doc.spans) == 3
        doc.update_attributes(0, 6, color="#000000")
        assert doc.spans == (Span(0, 6, TextAttributes(color="#000000")),)

    def test_update_attributes_rejects_out_of_range(self):
        """Test ranges outside of the text are rejected."""
        doc = AnnotatedDocument("abc")
        with pytest.raises(ValueError, match="outside the text"):
            doc.update_attributes(1, 10, color="#FF0000")

    def test_attributes_at(self):
        """Test attributes_at() finds the span of a character."""
        font = Font("Courier", 12.0)
        doc = AnnotatedDocument("abcdef")
        doc.update_attributes(3, 6, font=font)
        assert doc.attributes_at(0).font is None
        assert doc.attributes_at(3).font == font
        with pytest.raises(IndexError):
            doc.attributes_at(6)

    def test_has_link(self):
        """Test has_link() detects any overlap with a linked span."""
        doc = AnnotatedDocument("0123456789")
        doc.update_attributes(3, 5, link="http://example.com")
        assert doc.has_link(0, 4)
        assert doc.has_link(4, 9)
        assert not doc.has_link(0, 3)
        assert not doc.has_link(5, 10)

    def test_images_are_sorted_by_offset(self):
        """Test images are kept in offset order."""
        doc = AnnotatedDocument("abc")
        doc.add_image(ImageAttachment(offset=3, data=b"second"))
        doc.add_image(ImageAttachment(offset=1, data=b"first"))
        assert [image.data for image in doc.images] == [b"first", b"second"]

    def test_rejects_image_outside_text(self):
        """Test an image cannot be anchored past the end of the text."""
        doc = AnnotatedDocument("abc")
        with pytest.raises(ValueError, match="Image offset"):
            doc.add_image(ImageAttachment(offset=4, data=b"x"))

    def test_copy_is_independent(self):
        """Test changing a copy leaves the original alone."""
        doc = AnnotatedDocument("abc", images=[ImageAttachment(offset=0, data=b"x")])
        copy = doc.copy()
        assert copy == doc
        copy.update_attributes(0, 1, color="#FF0000")
        assert copy != doc
        assert doc.attributes_at(0).color is None
