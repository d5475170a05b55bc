"""Shared fixtures: a monospace measurer and an isolated settings store."""

import pytest

from readerheader.settings_persistence import SettingsPersistence
from readerheader.text_fitter import MeasurerFactory, TextMeasurer


class MonoMeasurer(TextMeasurer):
    """One unit per character, ten units per line."""

    LINE_HEIGHT = 10

    def __init__(self, factory):
        self.factory = factory
        self.freed = False
        self.measured = []

    def width(self, text):
        assert not self.freed, "measurer used after free()"
        self.measured.append(text)
        return len(text)

    def height(self):
        return self.LINE_HEIGHT

    def free(self):
        self.freed = True
        self.factory.freed += 1


class MonoFactory(MeasurerFactory):
    def __init__(self):
        self.opened = 0
        self.freed = 0
        self.measurers = []

    def open(self, config):
        self.opened += 1
        measurer = MonoMeasurer(self)
        self.measurers.append(measurer)
        return measurer


@pytest.fixture
def mono_factory():
    return MonoFactory()


@pytest.fixture
def persistence(tmp_path):
    return SettingsPersistence(config_dir=tmp_path / "config")
