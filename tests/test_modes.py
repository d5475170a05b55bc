"""Tests for the header mode ring."""

from unittest.mock import Mock

import pytest

from readerheader.constants import HeaderConstants
from readerheader.errors import InvalidMode
from readerheader.modes import HeaderMode, ModeState
from readerheader.settings_persistence import SettingsPersistence


def test_default_mode_is_time_centered(persistence):
    assert ModeState(persistence).mode == HeaderMode.TIME_CENTER


@pytest.mark.parametrize("start", list(HeaderMode))
def test_next_six_times_returns_to_start(persistence, start):
    state = ModeState(persistence)
    state.select(start)
    for _ in range(6):
        state.next()
    assert state.mode == start


@pytest.mark.parametrize("start", list(HeaderMode))
def test_previous_six_times_returns_to_start(persistence, start):
    state = ModeState(persistence)
    state.select(start)
    for _ in range(6):
        state.previous()
    assert state.mode == start


def test_next_wraps_from_last_to_first(persistence):
    state = ModeState(persistence)
    state.select(HeaderMode.FULL_INFO)
    assert state.next() == HeaderMode.CLEAN


def test_previous_wraps_from_first_to_last(persistence):
    state = ModeState(persistence)
    state.select(1)
    assert state.previous() == HeaderMode.FULL_INFO


def test_next_follows_ring_order(persistence):
    state = ModeState(persistence)
    state.select(HeaderMode.CLEAN)
    seen = [state.next() for _ in range(5)]
    assert seen == [HeaderMode.PRINT_EDITION, HeaderMode.TITLE_TIME, HeaderMode.CHAPTER_TIME,
                    HeaderMode.TIME_CENTER, HeaderMode.FULL_INFO]


@pytest.mark.parametrize("bad", [0, 7, -1, 100, "3", 2.0, None, True])
def test_select_out_of_range_is_rejected(persistence, bad):
    on_change = Mock()
    state = ModeState(persistence, on_change=on_change)
    state.select(HeaderMode.CHAPTER_TIME)
    on_change.reset_mock()

    with pytest.raises(InvalidMode):
        state.select(bad)

    assert state.mode == HeaderMode.CHAPTER_TIME
    assert persistence.read_setting(HeaderConstants.MODE_KEY) == 4
    on_change.assert_not_called()


def test_invalid_mode_is_a_value_error(persistence):
    with pytest.raises(ValueError):
        ModeState(persistence).select(9)


def test_every_transition_persists_and_notifies(persistence):
    on_change = Mock()
    state = ModeState(persistence, on_change=on_change)

    state.next()
    assert persistence.read_setting(HeaderConstants.MODE_KEY) == 6
    state.previous()
    assert persistence.read_setting(HeaderConstants.MODE_KEY) == 5
    state.select(2)
    assert persistence.read_setting(HeaderConstants.MODE_KEY) == 2

    assert on_change.call_count == 3
    on_change.assert_called_with(HeaderMode.PRINT_EDITION)


def test_mode_survives_restart(tmp_path):
    first = ModeState(SettingsPersistence(config_dir=tmp_path))
    first.select(HeaderMode.TITLE_TIME)

    second = ModeState(SettingsPersistence(config_dir=tmp_path))
    assert second.mode == HeaderMode.TITLE_TIME


@pytest.mark.parametrize("stored", [0, 9, "abc", [1]])
def test_invalid_stored_mode_falls_back_to_default(persistence, stored):
    persistence.save_setting(HeaderConstants.MODE_KEY, stored)
    assert ModeState(persistence).mode == HeaderMode.TIME_CENTER


def test_mode_labels_cover_all_modes():
    assert all(mode.label for mode in HeaderMode)
    assert HeaderMode.CLEAN.label.startswith("Clean")
