from __future__ import annotations

"""
Unit tests for the Severity Scale.

Verifies:
1. Ranks and ordering of the eight levels.
2. Read-only name/rank tables.
3. Level coercion from names, ranks, and enum members.
"""

import pytest

from levellog.domain.errors import ConfigurationError
from levellog.domain.severity import (
    SEVERITY_NAMES,
    SEVERITY_RANKS,
    Severity,
    coerce_level,
    lookup_label,
)


def test_ranks_are_zero_to_seven_in_urgency_order() -> None:
    expected = ["EMERGENCY", "ALERT", "CRITICAL", "ERROR", "WARNING", "NOTICE", "INFO", "DEBUG"]
    assert [s.name for s in sorted(Severity)] == expected
    assert [int(s) for s in sorted(Severity)] == list(range(8))


def test_tables_are_inverse_of_each_other() -> None:
    for rank, name in SEVERITY_NAMES.items():
        assert SEVERITY_RANKS[name] == rank
    assert len(SEVERITY_NAMES) == 8


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        SEVERITY_NAMES[8] = "TRACE"  # type: ignore[index]
    with pytest.raises(TypeError):
        SEVERITY_RANKS["TRACE"] = 8  # type: ignore[index]


@pytest.mark.parametrize("value,expected", [
    ("warning", Severity.WARNING),
    ("  Error ", Severity.ERROR),
    ("DEBUG", Severity.DEBUG),
    (0, Severity.EMERGENCY),
    (5, Severity.NOTICE),
    (Severity.ALERT, Severity.ALERT),
])
def test_coerce_level_accepts_names_and_ranks(value, expected) -> None:
    assert coerce_level(value) is expected


@pytest.mark.parametrize("value", ["verbose", 8, -1, None, 2.5, True])
def test_coerce_level_rejects_unknown_values(value) -> None:
    with pytest.raises(ConfigurationError):
        coerce_level(value)


def test_lookup_label_is_exact() -> None:
    assert lookup_label("INFO") is Severity.INFO
    assert lookup_label("info") is None
    assert lookup_label("TRACE") is None
