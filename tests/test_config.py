"""
Unit tests for settings read from the environment.
"""

from pathlib import Path

import pytest

from typewriter.config import PageStyle, Settings

ENV_VARS = [
    "TYPEWRITER_LOG_LEVEL",
    "TYPEWRITER_FONT",
    "TYPEWRITER_FONT_DIR",
    "TYPEWRITER_DOWNLOAD_DIR",
    "TYPEWRITER_VOLUME",
    "TYPEWRITER_SOUND",
    "TYPEWRITER_DOWNLOAD_DELAY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.font_id == "special-elite"
        assert settings.volume == 0.5
        assert settings.sound_enabled
        assert settings.font_dir is None

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TYPEWRITER_FONT", "adler")
        monkeypatch.setenv("TYPEWRITER_FONT_DIR", str(tmp_path))
        monkeypatch.setenv("TYPEWRITER_DOWNLOAD_DIR", str(tmp_path / "dl"))
        monkeypatch.setenv("TYPEWRITER_VOLUME", "0.2")
        monkeypatch.setenv("TYPEWRITER_SOUND", "off")
        monkeypatch.setenv("TYPEWRITER_DOWNLOAD_DELAY", "0")
        settings = Settings.from_env()
        assert settings.font_id == "adler"
        assert settings.font_dir == tmp_path
        assert settings.download_dir == Path(tmp_path / "dl")
        assert settings.volume == 0.2
        assert not settings.sound_enabled
        assert settings.download_delay == 0.0

    @pytest.mark.parametrize("name,value", [
        ("TYPEWRITER_FONT", "comic-sans"),
        ("TYPEWRITER_VOLUME", "loud"),
        ("TYPEWRITER_VOLUME", "7"),
        ("TYPEWRITER_SOUND", "maybe"),
    ])
    def test_invalid_values_fall_back(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        settings = Settings.from_env()
        assert settings == Settings(download_dir=settings.download_dir)

    def test_missing_font_dir_is_ignored(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TYPEWRITER_FONT_DIR", str(tmp_path / "missing"))
        assert Settings.from_env().font_dir is None


class TestPageStyle:

    def test_derived_widths(self):
        style = PageStyle()
        assert style.text_width == 680
        assert style.image_max_width == 640

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            PageStyle().page_width = 10
