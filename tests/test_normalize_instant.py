from __future__ import annotations

from datetime import date, datetime, timezone

import pandas as pd

from saintlocator.processing.normalize import instant_to_datetime, normalize_instant

REF = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)
REF_MS = 1_710_498_600_000


class _StoreTimestamp:
    """Mimics a store timestamp exposing toDate()."""

    def __init__(self, dt: datetime) -> None:
        self._dt = dt

    def toDate(self) -> datetime:
        return self._dt


class _BrokenTimestamp:
    seconds = 1_710_498_600

    def toDate(self) -> datetime:
        raise RuntimeError("detached")


class _GarbageTimestamp:
    def toDate(self) -> str:
        return "garbage"


class TestNormalizeInstant:
    def test_reference_constant(self) -> None:
        assert int(REF.timestamp()) * 1000 == REF_MS

    def test_to_date_object(self) -> None:
        assert normalize_instant(_StoreTimestamp(REF)) == REF_MS

    def test_seconds_payload(self) -> None:
        assert normalize_instant({"seconds": 1_710_498_600, "nanoseconds": 0}) == REF_MS

    def test_seconds_without_nanoseconds(self) -> None:
        assert normalize_instant({"seconds": 1_710_498_600}) == REF_MS

    def test_nanoseconds_round_half_up(self) -> None:
        assert normalize_instant({"seconds": 1_710_498_600, "nanoseconds": 1_500_000}) == REF_MS + 2
        assert normalize_instant({"seconds": 1_710_498_600, "nanoseconds": 499_999_999}) == REF_MS + 500

    def test_admin_serialized_payload(self) -> None:
        assert normalize_instant({"_seconds": 1_710_498_600, "_nanoseconds": 0}) == REF_MS

    def test_ten_digit_number_is_seconds(self) -> None:
        assert normalize_instant(1_710_498_600) == REF_MS

    def test_thirteen_digit_number_is_millis(self) -> None:
        assert normalize_instant(REF_MS) == REF_MS
        assert normalize_instant(float(REF_MS)) == REF_MS

    def test_aware_datetime(self) -> None:
        assert normalize_instant(REF) == REF_MS

    def test_naive_datetime_is_utc(self) -> None:
        assert normalize_instant(datetime(2024, 3, 15, 10, 30)) == REF_MS

    def test_plain_date_is_midnight_utc(self) -> None:
        assert normalize_instant(date(2024, 3, 15)) == REF_MS - (10 * 3600 + 30 * 60) * 1000

    def test_pandas_timestamp(self) -> None:
        assert normalize_instant(pd.Timestamp("2024-03-15T10:30:00Z")) == REF_MS

    def test_iso_string(self) -> None:
        assert normalize_instant("2024-03-15T10:30:00Z") == REF_MS
        assert normalize_instant("2024-03-15T16:00:00+05:30") == REF_MS

    def test_all_encodings_agree(self) -> None:
        encodings = [
            _StoreTimestamp(REF),
            {"seconds": 1_710_498_600, "nanoseconds": 0},
            1_710_498_600,
            REF_MS,
            REF,
            "2024-03-15T10:30:00.000Z",
        ]
        assert {normalize_instant(v) for v in encodings} == {REF_MS}

    def test_absent_inputs(self) -> None:
        assert normalize_instant(None) is None
        assert normalize_instant("not a date") is None
        assert normalize_instant("") is None
        assert normalize_instant("   ") is None
        assert normalize_instant({}) is None
        assert normalize_instant([]) is None

    def test_clock_keywords_are_absent(self) -> None:
        assert normalize_instant("now") is None
        assert normalize_instant("today") is None
        assert normalize_instant(" Now ") is None

    def test_string_parse_is_repeatable(self) -> None:
        assert normalize_instant("2024-03-15T10:30:00Z") == normalize_instant("2024-03-15T10:30:00Z")

    def test_ten_digit_rule_ignores_sign_and_fraction(self) -> None:
        assert normalize_instant(-1_710_498_600) == -REF_MS
        assert normalize_instant(1_710_498_600.5) == REF_MS + 500

    def test_non_finite_and_bool(self) -> None:
        assert normalize_instant(float("nan")) is None
        assert normalize_instant(float("inf")) is None
        assert normalize_instant(True) is None

    def test_nat(self) -> None:
        assert normalize_instant(pd.NaT) is None

    def test_out_of_range_number(self) -> None:
        assert normalize_instant(10**20) is None

    def test_failing_to_date_falls_through(self) -> None:
        assert normalize_instant(_BrokenTimestamp()) == REF_MS

    def test_invalid_to_date_result(self) -> None:
        assert normalize_instant(_GarbageTimestamp()) is None

    def test_non_numeric_seconds(self) -> None:
        assert normalize_instant({"seconds": "soon"}) is None


class TestInstantToDatetime:
    def test_roundtrip_reference(self) -> None:
        assert instant_to_datetime(REF_MS) == REF

    def test_absent(self) -> None:
        assert instant_to_datetime(None) is None
