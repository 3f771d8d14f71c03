"""Unit tests for NoteSettings."""

from pathlib import Path

import pytest

from linknotes.richtext.annotator import Palette
from linknotes.richtext.document import Font
from linknotes.settings import NoteSettings


@pytest.fixture
def settings(qsettings):
    return NoteSettings(qsettings)


class TestNoteSettings:
    """Test cases for NoteSettings."""

    def test_defaults(self, settings):
        """Test every preference has a default."""
        assert settings.get_font_family() == "Helvetica"
        assert settings.get_font_size() == 17.0
        assert settings.get_link_color() == "#007AFF"
        assert settings.get_database_path() is None

    def test_font(self, settings):
        settings.set_font_family("Courier")
        settings.set_font_size(11.5)
        assert settings.font() == Font("Courier", 11.5)

    def test_font_size_must_be_positive(self, settings):
        with pytest.raises(ValueError, match="must be positive"):
            settings.set_font_size(0)

    def test_palette(self, settings):
        settings.set_link_color("#FF8800")
        assert settings.palette() == Palette(link="#FF8800")

    def test_database_path(self, settings, tmp_path):
        """Test the database path can be set and cleared."""
        path = tmp_path / "elsewhere.db"
        settings.set_database_path(path)
        assert settings.get_database_path() == path
        settings.set_database_path(None)
        assert settings.get_database_path() is None

    def test_database_path_expands_home(self, settings):
        settings.set_database_path(Path("~/notes.db"))
        assert settings.get_database_path() == Path.home() / "notes.db"

    def test_values_are_persisted(self, qsettings):
        """Test a value written by one instance is read by the next."""
        NoteSettings(qsettings).set_font_family("Georgia")
        qsettings.sync()
        assert NoteSettings(qsettings).get_font_family() == "Georgia"
