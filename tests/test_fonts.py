"""
Unit tests for the font registry and font loading.
"""

import logging

import pytest
from PIL import ImageFont

from poster_composer.resources import fonts
from poster_composer.resources.fonts import FontLoader, FontRegistry
from poster_composer.utils.constants import BUNDLED_FONTS, BUNDLED_FONTS_DIR
from poster_composer.utils.exceptions import FontLoadError, InvalidInputError


class TestRegisterFont:
    """Test explicit registration."""

    def test_register_and_get(self, registry, fake_font_file):
        registry.register_font("Brand", fake_font_file)

        assert registry.is_font_registered("Brand")
        assert registry.get_font("Brand") == b"not really a font"
        assert registry.list_fonts() == ["Brand"]

    def test_reregistering_overwrites(self, registry, fake_font_file, tmp_path):
        other = tmp_path / "Other.otf"
        other.write_bytes(b"other bytes")

        registry.register_font("Brand", fake_font_file)
        registry.register_font("Brand", other)

        assert registry.get_font("Brand") == b"other bytes"
        assert registry.list_fonts() == ["Brand"]

    def test_empty_name_raises(self, registry, fake_font_file):
        with pytest.raises(InvalidInputError):
            registry.register_font("", fake_font_file)

    def test_empty_path_raises(self, registry):
        with pytest.raises(InvalidInputError):
            registry.register_font("Brand", "")

    def test_wrong_extension_raises(self, registry, tmp_path):
        font_file = tmp_path / "Brand.woff"
        font_file.write_bytes(b"data")

        with pytest.raises(InvalidInputError, match=".ttf or .otf"):
            registry.register_font("Brand", font_file)

    def test_missing_file_raises_font_load_error(self, registry, tmp_path):
        with pytest.raises(FontLoadError) as exc_info:
            registry.register_font("Brand", tmp_path / "missing.ttf")

        assert exc_info.value.font_name == "Brand"
        assert "File not found" in str(exc_info.value)

    def test_unknown_font_returns_none(self, registry):
        assert registry.get_font("Nope") is None
        assert not registry.is_font_registered("Nope")

    def test_clear_fonts(self, registry, fake_font_file):
        registry.register_font("Brand", fake_font_file)
        registry.clear_fonts()

        assert registry.list_fonts() == []


class TestBundledFonts:
    """Test loading of the bundled font set."""

    def test_missing_bundled_fonts_are_skipped_with_warning(self, registry, caplog):
        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            loaded = registry.init_bundled_fonts()

        assert loaded == []
        assert registry.list_fonts() == []
        assert "Bundled font file not found" in caplog.text
        assert "README.md" in caplog.text

    def test_complete_set_loads_without_fallback_warning(self, tmp_path, caplog):
        for filename in BUNDLED_FONTS.values():
            (tmp_path / filename).write_bytes(b"font")
        registry = FontRegistry(bundled_fonts_dir=tmp_path)

        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            loaded = registry.init_bundled_fonts()

        assert loaded == list(BUNDLED_FONTS)
        assert "fallback font" not in caplog.text

    def test_font_folder_documents_where_to_get_fonts(self):
        readme = (BUNDLED_FONTS_DIR / "README.md").read_text()
        for filename in BUNDLED_FONTS.values():
            assert filename in readme

    def test_available_bundled_fonts_are_loaded(self, tmp_path):
        (tmp_path / "Oswald-Bold.ttf").write_bytes(b"oswald")
        registry = FontRegistry(bundled_fonts_dir=tmp_path)

        loaded = registry.init_bundled_fonts()

        assert loaded == ["Oswald-Bold"]
        assert registry.get_font("Oswald-Bold") == b"oswald"

    def test_list_bundled_fonts(self):
        assert fonts.list_bundled_fonts() == list(BUNDLED_FONTS)
        assert set(BUNDLED_FONTS) == {"Oswald-Bold", "Roboto-Regular", "BebasNeue-Regular"}


class TestModuleFunctions:
    """Test the functions backed by the process-wide registry."""

    @pytest.fixture(autouse=True)
    def clean_default_registry(self):
        fonts.clear_fonts()
        yield
        fonts.clear_fonts()

    def test_register_font_uses_default_registry(self, fake_font_file):
        fonts.register_font("Global", fake_font_file)

        assert fonts.is_font_registered("Global")
        assert fonts.get_font("Global") == b"not really a font"
        assert fonts.list_fonts() == ["Global"]
        assert fonts.get_registry().is_font_registered("Global")

    def test_get_default_font(self):
        assert fonts.get_default_font() == "sans-serif"


class TestFontLoader:
    """Test font lookup with fallback."""

    def test_unregistered_family_falls_back_with_warning(self, registry, caplog):
        loader = FontLoader(registry)

        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            font = loader.load_font("Nope", 24)

        assert isinstance(font, ImageFont.FreeTypeFont)
        assert "Font 'Nope' is not registered" in caplog.text

    def test_unparsable_registered_font_falls_back_with_warning(self, registry, fake_font_file, caplog):
        registry.register_font("Broken", fake_font_file)
        loader = FontLoader(registry)

        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            font = loader.load_font("Broken", 24)

        assert isinstance(font, ImageFont.FreeTypeFont)
        assert "Cannot read registered font 'Broken'" in caplog.text

    def test_fallback_font_has_requested_size(self, registry):
        font = FontLoader(registry).load_font("Nope", 31)

        assert font.size == 31
