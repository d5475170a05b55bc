"""Tests for layout configuration and its persisted store."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock

import pytest

from readerheader.errors import InvalidSetting
from readerheader.header import ReaderHeader
from readerheader.host import Screen
from readerheader.layout_config import (
    SETTING_FIELDS,
    LayoutConfig,
    LayoutSettings,
    Separator,
    TopPadding,
    default_config,
    parse_value,
    validate_value,
)
from readerheader.settings_persistence import SettingsPersistence


class TestLayoutConfigDefaults(unittest.TestCase):
    """Test the default configuration."""

    def test_defaults(self):
        config = LayoutConfig()
        self.assertEqual(config.font_size, 14)
        self.assertFalse(config.bold)
        self.assertEqual(config.top_padding, TopPadding.SMALL)
        self.assertEqual(config.left_max_width_pct, 48)
        self.assertEqual(config.right_max_width_pct, 48)
        self.assertEqual(config.center_max_width_pct, 84)
        self.assertEqual(config.separator, Separator.EN_DASH)
        self.assertTrue(config.use_book_margins)
        self.assertEqual(config.bottom_padding, 7)

    def test_padding_pixels(self):
        self.assertEqual(TopPadding.SMALL.pixels, 2)
        self.assertEqual(TopPadding.DEFAULT.pixels, 5)
        self.assertEqual(TopPadding.LARGE.pixels, 10)
        self.assertEqual(LayoutConfig(top_padding=TopPadding.LARGE).top_padding_px, 10)

    def test_separator_glyphs(self):
        glyphs = {sep: sep.glyph for sep in Separator}
        self.assertEqual(glyphs[Separator.BAR], "|")
        self.assertEqual(glyphs[Separator.BULLET], "•")
        self.assertEqual(glyphs[Separator.DOT], "·")
        self.assertEqual(glyphs[Separator.EM_DASH], "—")
        self.assertEqual(glyphs[Separator.EN_DASH], "–")

    def test_footer_settings_supply_defaults(self):
        config = default_config({"text_font_size": 18, "text_font_bold": True,
                                 "container_height": 12})
        self.assertEqual(config.font_size, 18)
        self.assertTrue(config.bold)
        self.assertEqual(config.bottom_padding, 12)

    def test_bad_footer_settings_are_ignored(self):
        config = default_config({"text_font_size": 99, "container_height": "tall"})
        self.assertEqual(config.font_size, 14)
        self.assertEqual(config.bottom_padding, 7)

    def test_footer_settings_of_wrong_type_are_ignored(self):
        with self.assertLogs("readerheader.layout_config", level="WARNING"):
            config = default_config("oops")
        self.assertEqual(config, LayoutConfig())

    def test_stored_footer_of_wrong_type_does_not_break_startup(self):
        temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, temp_dir)
        store = SettingsPersistence(config_dir=Path(temp_dir))
        store.save_setting("footer", ["not", "a", "dict"])

        header = ReaderHeader(Screen(600, 800), persistence=store, measurer_factory=Mock())
        self.assertEqual(header.settings.config, LayoutConfig())


@pytest.mark.parametrize("name,value", [
    ("font_size", 7),
    ("font_size", 37),
    ("font_size", "14"),
    ("font_size", True),
    ("left_max_width_pct", 9),
    ("left_max_width_pct", 91),
    ("right_max_width_pct", 95),
    ("center_max_width_pct", 101),
    ("bold", 1),
    ("use_book_margins", "yes"),
    ("separator", "tilde"),
    ("top_padding", "huge"),
    ("font_face", "Comic Sans"),
    ("bottom_padding", -1),
    ("no_such_field", 1),
])
def test_validate_rejects(name, value):
    with pytest.raises(InvalidSetting):
        validate_value(name, value)


@pytest.mark.parametrize("name,value,expected", [
    ("font_size", 8, 8),
    ("font_size", 36, 36),
    ("center_max_width_pct", 100, 100),
    ("left_max_width_pct", 10, 10),
    ("separator", "em_dash", Separator.EM_DASH),
    ("separator", Separator.DOT, Separator.DOT),
    ("top_padding", "default", TopPadding.DEFAULT),
    ("font_face", "Times", "Times"),
])
def test_validate_accepts(name, value, expected):
    assert validate_value(name, value) == expected


def test_parse_value_from_text():
    assert parse_value("bold", "yes") is True
    assert parse_value("use_book_margins", "off") is False
    assert parse_value("font_size", "20") == 20
    assert parse_value("separator", "bar") is Separator.BAR
    with pytest.raises(InvalidSetting):
        parse_value("font_size", "twenty")
    with pytest.raises(InvalidSetting):
        parse_value("font_size", "50")
    with pytest.raises(InvalidSetting):
        parse_value("bold", "maybe")


def test_every_field_has_a_distinct_key():
    keys = [spec.key for spec in SETTING_FIELDS.values()]
    assert len(keys) == len(set(keys))
    assert set(SETTING_FIELDS) == set(LayoutConfig.__dataclass_fields__)


def test_set_persists_under_its_key(persistence):
    settings = LayoutSettings(persistence)
    settings.set("font_size", 20)
    settings.set("separator", "bullet")

    assert settings.config.font_size == 20
    assert settings.config.separator is Separator.BULLET
    assert persistence.read_setting("header_font_size") == 20
    assert persistence.read_setting("header_separator") == "bullet"


def test_settings_survive_restart(tmp_path):
    LayoutSettings(SettingsPersistence(config_dir=tmp_path)).set("top_padding", TopPadding.LARGE)
    reloaded = LayoutSettings(SettingsPersistence(config_dir=tmp_path))
    assert reloaded.config.top_padding is TopPadding.LARGE


def test_rejected_set_changes_nothing(persistence):
    on_change = Mock()
    settings = LayoutSettings(persistence, on_change=on_change)
    with pytest.raises(InvalidSetting):
        settings.set("center_max_width_pct", 5)
    assert settings.config.center_max_width_pct == 84
    assert persistence.read_setting("header_center_max_width_pct") is None
    on_change.assert_not_called()


def test_set_notifies(persistence):
    on_change = Mock()
    settings = LayoutSettings(persistence, on_change=on_change)
    settings.set("bold", True)
    on_change.assert_called_once_with("bold", True)


def test_invalid_stored_value_falls_back_to_default(persistence):
    persistence.save_setting("header_font_size", 99)
    persistence.save_setting("header_separator", "tilde")
    settings = LayoutSettings(persistence, footer_settings={"text_font_size": 16})
    assert settings.config.font_size == 16
    assert settings.config.separator is Separator.EN_DASH


def test_step_clamps_to_bounds(persistence):
    settings = LayoutSettings(persistence)
    settings.set("center_max_width_pct", 99)
    assert settings.step("center_max_width_pct", 2) == 100
    assert settings.step("center_max_width_pct", -200) == 10
    with pytest.raises(InvalidSetting):
        settings.step("separator", 1)


def test_reset_restores_default(persistence):
    settings = LayoutSettings(persistence, footer_settings={"text_font_size": 12})
    settings.set("font_size", 30)
    assert settings.reset("font_size") == 12
    assert persistence.read_setting("header_font_size") == 12


def test_get_unknown_setting(persistence):
    with pytest.raises(InvalidSetting):
        LayoutSettings(persistence).get("colour")
