"""Tests for rounding and timestamp helpers."""

from datetime import UTC, datetime, timedelta, timezone

from training_admin.utils import (
    clamp_score,
    format_datetime,
    parse_datetime,
    percentage,
    round_half_up,
    rounded_mean,
)


class TestRounding:
    def test_half_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(88.5) == 89
        assert round_half_up(42.49) == 42

    def test_percentage(self) -> None:
        assert percentage(4, 13) == 31
        assert percentage(1, 8) == 13
        assert percentage(3, 0) == 0

    def test_rounded_mean(self) -> None:
        assert rounded_mean([85, 0]) == 43
        assert rounded_mean(x for x in (85, 92, 88)) == 88
        assert rounded_mean([]) == 0

    def test_clamp_score(self) -> None:
        assert clamp_score(107) == 100
        assert clamp_score(-3) == 0
        assert clamp_score(98.5) == 99


class TestTimestamps:
    def test_parse_zulu(self) -> None:
        parsed = parse_datetime("2026-03-10T12:00:00Z")
        assert parsed == datetime(2026, 3, 10, 12, 0, tzinfo=UTC)

    def test_naive_assumed_utc(self) -> None:
        assert parse_datetime("2026-03-10T12:00:00").tzinfo is not None

    def test_empty(self) -> None:
        assert parse_datetime("") is None
        assert format_datetime(None) is None

    def test_offset_preserved_on_round_trip(self) -> None:
        value = datetime(2026, 3, 10, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert parse_datetime(format_datetime(value)) == value
