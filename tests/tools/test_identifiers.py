"""Tests for identifier syntax checks."""
from __future__ import annotations

import pytest

from app.tools.identifiers import MAX_ID, parse_id


@pytest.mark.parametrize(
    "value, expected",
    [(1, 1), ("42", 42), (" 7 ", 7), ("0007", 7), (MAX_ID, MAX_ID), (str(MAX_ID), MAX_ID)],
)
def test_parse_id_accepts_positive_integers(value, expected):
    assert parse_id(value) == expected


@pytest.mark.parametrize(
    "value",
    [0, -3, "0", "-1", "1.5", "abc", "", None, True, 3.0, "６", MAX_ID + 1, str(MAX_ID + 1), "9" * 30],
)
def test_parse_id_rejects_everything_else(value):
    assert parse_id(value) is None
