"""
Tests for the proficiency scale
"""
import logging

import pytest

from errors import InvalidInput, UnknownProficiency
from matching.proficiency import PROFICIENCY_LEVELS, UNKNOWN_LEVEL, level_of, parse_proficiency


def test_levels_are_totally_ordered():
    assert [level_of(n) for n in ("Beginner", "Intermediate", "Advanced", "Expert")] == [1, 2, 3, 4]


def test_unknown_name_ranks_below_every_level(caplog):
    with caplog.at_level(logging.WARNING):
        assert level_of("Guru") == UNKNOWN_LEVEL
        assert level_of(None) == UNKNOWN_LEVEL
    assert all(UNKNOWN_LEVEL < lvl for lvl in PROFICIENCY_LEVELS.values())
    assert "Guru" in caplog.text


def test_table_is_read_only():
    with pytest.raises(TypeError):
        PROFICIENCY_LEVELS["Master"] = 5


def test_parse_proficiency_strips_and_validates():
    assert parse_proficiency(" Advanced ") == "Advanced"
    with pytest.raises(UnknownProficiency):
        parse_proficiency("expert")  # case-sensitive, as stored
    with pytest.raises(InvalidInput):
        parse_proficiency("")
