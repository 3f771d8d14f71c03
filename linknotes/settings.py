"""User preferences for LinkNotes, stored with :class:`QSettings`."""

from pathlib import Path
from typing import Final, cast

from PySide6.QtCore import QSettings

from linknotes.richtext.annotator import Palette
from linknotes.richtext.document import Font

#: The organization name used for the settings store.
ORGANIZATION_NAME: Final[str] = "LinkNotes"
#: The application name used for the settings store.
APPLICATION_NAME: Final[str] = "LinkNotes"


class NoteSettings:
    """
    Editor and storage preferences.

    Args:
        settings: The settings store.  If None, the per-user native store for
            LinkNotes is used.

    """

    #: The default font family.
    DEFAULT_FONT_FAMILY: Final[str] = Font.family
    #: The default font size in points.
    DEFAULT_FONT_SIZE: Final[float] = Font.size
    #: The default link color.
    DEFAULT_LINK_COLOR: Final[str] = Palette.link

    def __init__(self, settings: QSettings | None = None) -> None:
        #: The settings store.
        self.settings = settings or QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    def get_font_family(self) -> str:
        """
        Get the editor font family.

        Returns:
            Font family (default: Helvetica)

        """
        return cast(
            "str",
            self.settings.value(
                "editor/font_family", self.DEFAULT_FONT_FAMILY, type=str
            ),
        )

    def set_font_family(self, family: str) -> None:
        self.settings.setValue("editor/font_family", family)

    def get_font_size(self) -> float:
        """
        Get the editor font size.

        Returns:
            Font size in points (default: 17)

        """
        return cast(
            "float",
            self.settings.value("editor/font_size", self.DEFAULT_FONT_SIZE, type=float),
        )

    def set_font_size(self, size: float) -> None:
        if size <= 0:
            msg = f"Font size must be positive, not {size}"
            raise ValueError(msg)
        self.settings.setValue("editor/font_size", float(size))

    def get_link_color(self) -> str:
        """
        Get the color used for links.

        Returns:
            Color as ``#RRGGBB`` (default: #007AFF)

        """
        return cast(
            "str",
            self.settings.value("editor/link_color", self.DEFAULT_LINK_COLOR, type=str),
        )

    def set_link_color(self, color: str) -> None:
        self.settings.setValue("editor/link_color", color)

    def get_database_path(self) -> Path | None:
        """
        Get the configured database location.

        Returns:
            Path to the database file, or None to use the default location

        """
        value = cast(
            "str", self.settings.value("storage/database_path", "", type=str)
        )
        return Path(value).expanduser() if value else None

    def set_database_path(self, path: Path | None) -> None:
        if path is None:
            self.settings.remove("storage/database_path")
        else:
            self.settings.setValue("storage/database_path", str(path))

    def font(self) -> Font:
        """
        The editor font as a :class:`~linknotes.richtext.document.Font`.
        """
        return Font(family=self.get_font_family(), size=self.get_font_size())

    def palette(self) -> Palette:
        """
        The colors to annotate documents with.
        """
        return Palette(link=self.get_link_color())
