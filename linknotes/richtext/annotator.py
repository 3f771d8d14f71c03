"""Link annotation and styling of rich documents."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from linknotes.richtext.detector import LinkDetector, RegexLinkDetector
from linknotes.richtext.document import AnnotatedDocument, Font

logger = logging.getLogger(__name__)


class DisplayMode(StrEnum):
    """The light/dark appearance of the host UI."""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Palette:
    """The text colors used by :class:`LinkAnnotator`."""

    #: Text color in light mode.
    light_text: str = "#000000"
    #: Text color in dark mode.
    dark_text: str = "#FFFFFF"
    #: Color of links in either mode.
    link: str = "#007AFF"

    def text_color(self, mode: DisplayMode) -> str:
        """
        Get the normal text color for a display mode.

        Args:
            mode: The display mode

        Returns:
            Dark text for light mode, light text for dark mode

        """
        if mode == DisplayMode.DARK:
            return self.dark_text
        return self.light_text


class LinkAnnotator:
    """
    Detects links in text and styles the result for display.

    Keyword Args:
        detector_factory: Callable that builds the :class:`LinkDetector`
        font: The font applied to the whole document
        palette: The colors for normal text and links

    """

    #: The default font.
    DEFAULT_FONT: Final[Font] = Font()

    def __init__(
        self,
        detector_factory: Callable[[], LinkDetector] = RegexLinkDetector,
        font: Font | None = None,
        palette: Palette | None = None,
    ) -> None:
        #: Builds the link detector on first use.
        self.detector_factory = detector_factory
        #: The font applied to the whole document.
        self.font = font or self.DEFAULT_FONT
        #: The colors for normal text and links.
        self.palette = palette or Palette()
        self._detector: LinkDetector | None = None

    def _get_detector(self) -> LinkDetector:
        if self._detector is None:
            self._detector = self.detector_factory()
        return self._detector

    def annotate(
        self,
        source: str | AnnotatedDocument,
        display_mode: DisplayMode = DisplayMode.LIGHT,
    ) -> AnnotatedDocument:
        """
        Add links for every URL in ``source`` and style the result.

        Links already present in ``source`` are kept as they are; detected
        links that overlap one are skipped.  The whole document then gets
        :attr:`font` and the normal color for ``display_mode``, and linked
        spans get the link color.  This never raises: if detection fails,
        the document is returned styled but without new links.

        Args:
            source: Plain text or an existing document, which is not modified

        Keyword Args:
            display_mode: The display mode to pick the text color for

        Returns:
            A new annotated document

        """
        if isinstance(source, AnnotatedDocument):
            document = source.copy()
        else:
            document = AnnotatedDocument(source)
        self.add_links(document)
        self.apply_style(document, display_mode)
        return document

    def add_links(self, document: AnnotatedDocument) -> None:
        """
        Attach a link to every detected URL that is not linked already.

        Args:
            document: The document to change in place

        """
        if not document.text:
            return
        try:
            matches = self._get_detector().detect_links(document.text)
        except Exception:
            logger.exception("Link detection failed, leaving text unlinked")
            return
        for match in matches:
            if document.has_link(match.start, match.end):
                continue
            document.update_attributes(match.start, match.end, link=match.url)

    def apply_style(
        self, document: AnnotatedDocument, display_mode: DisplayMode
    ) -> None:
        """
        Apply the default font and colors.

        Args:
            document: The document to change in place
            display_mode: The display mode to pick the text color for

        """
        document.update_attributes(
            0,
            len(document),
            font=self.font,
            color=self.palette.text_color(display_mode),
        )
        for span in document.link_spans:
            document.update_attributes(span.start, span.end, color=self.palette.link)
