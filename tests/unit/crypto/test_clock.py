"""Tests for time sources and timestamp truncation."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from appjwt.crypto.clock import fixed_clock, system_clock, to_epoch_seconds
from appjwt.crypto.errors import InvalidClaimsError


class TestClocks:
    """Tests for clock callables."""

    def test_system_clock_is_utc(self) -> None:
        assert system_clock().tzinfo is UTC

    def test_fixed_clock_repeats_value(self) -> None:
        clock = fixed_clock(1_700_000_000)
        assert clock() == clock() == 1_700_000_000


class TestToEpochSeconds:
    """Tests for issuance time validation."""

    def test_int_unchanged(self) -> None:
        assert to_epoch_seconds(1_700_000_000) == 1_700_000_000

    def test_float_truncated(self) -> None:
        assert to_epoch_seconds(1_700_000_000.9) == 1_700_000_000

    def test_zero_is_valid(self) -> None:
        assert to_epoch_seconds(0) == 0

    def test_aware_datetime(self) -> None:
        offset = timezone(timedelta(hours=2))
        now = datetime(2023, 11, 15, 0, 13, 20, 500_000, tzinfo=offset)
        assert to_epoch_seconds(now) == 1_700_000_000

    def test_naive_datetime_rejected(self) -> None:
        with pytest.raises(InvalidClaimsError, match="timezone-aware"):
            to_epoch_seconds(datetime(2023, 11, 14, 22, 13, 20))

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), -1, -0.5])
    def test_invalid_numbers_rejected(self, value: float) -> None:
        with pytest.raises(InvalidClaimsError):
            to_epoch_seconds(value)

    @pytest.mark.parametrize("value", [True, "1700000000", None])
    def test_wrong_types_rejected(self, value: object) -> None:
        with pytest.raises(InvalidClaimsError):
            to_epoch_seconds(value)  # type: ignore[arg-type]
