"""Tests for wg_wager.domain.rules.validate_wager."""

from decimal import Decimal

import pytest

from src.wg_common.errors import (
    InvalidOddsError,
    InvalidSellingPercentageError,
    InvalidSellingPriceError,
    InvalidTotalWagerValueError,
)
from src.wg_common.money import PRICE_MAX
from src.wg_wager.domain.models import WagerDraft
from src.wg_wager.domain.rules import INT_COLUMN_MAX, validate_wager


def _draft(**kwargs) -> WagerDraft:
    defaults = dict(
        total_wager_value=100,
        odds=1,
        selling_percentage=10,
        selling_price=Decimal("10.00"),
    )
    defaults.update(kwargs)
    return WagerDraft(**defaults)


class TestValidateWager:
    def test_valid(self) -> None:
        validate_wager(_draft())  # Should not raise

    def test_price_at_floor_ok(self) -> None:
        # 15 * 33 // 100 = 4
        validate_wager(_draft(total_wager_value=15, selling_percentage=33,
                              selling_price=Decimal("4")))

    @pytest.mark.parametrize("total", [0, -1])
    def test_total_wager_value(self, total: int) -> None:
        with pytest.raises(InvalidTotalWagerValueError):
            validate_wager(_draft(total_wager_value=total))

    def test_odds(self) -> None:
        with pytest.raises(InvalidOddsError):
            validate_wager(_draft(odds=0))

    @pytest.mark.parametrize("pct", [0, -5, 101])
    def test_selling_percentage(self, pct: int) -> None:
        with pytest.raises(InvalidSellingPercentageError):
            validate_wager(_draft(selling_percentage=pct))

    def test_selling_percentage_100_ok(self) -> None:
        validate_wager(_draft(selling_percentage=100, selling_price=Decimal("100")))

    def test_scale_three_digits(self) -> None:
        with pytest.raises(InvalidSellingPriceError) as exc_info:
            validate_wager(_draft(selling_price=Decimal("10.111")))
        assert exc_info.value.reason == "scale"

    def test_too_low(self) -> None:
        # floor = 100 * 100 // 100 = 100
        with pytest.raises(InvalidSellingPriceError) as exc_info:
            validate_wager(_draft(selling_percentage=100, selling_price=Decimal("10.11")))
        assert exc_info.value.reason == "too low"

    def test_first_failure_wins(self) -> None:
        with pytest.raises(InvalidTotalWagerValueError):
            validate_wager(_draft(total_wager_value=-1, odds=0,
                                  selling_price=Decimal("10.111")))

    def test_scale_checked_before_floor(self) -> None:
        with pytest.raises(InvalidSellingPriceError) as exc_info:
            validate_wager(_draft(selling_percentage=100, selling_price=Decimal("0.001")))
        assert exc_info.value.reason == "scale"


class TestColumnBounds:
    def test_large_total_at_full_percentage_ok(self) -> None:
        # floor price 30_000_000 exceeds int4 once multiplied by 100
        validate_wager(_draft(total_wager_value=30_000_000, selling_percentage=100,
                              selling_price=Decimal("30000000.00")))

    def test_total_at_int_max_ok(self) -> None:
        validate_wager(_draft(total_wager_value=INT_COLUMN_MAX, selling_percentage=1,
                              selling_price=Decimal("30000000.00")))

    def test_total_beyond_int_column(self) -> None:
        with pytest.raises(InvalidTotalWagerValueError) as exc_info:
            validate_wager(_draft(total_wager_value=3_000_000_000, selling_percentage=1,
                                  selling_price=Decimal("30000000.00")))
        assert exc_info.value.http_status == 400
        assert str(INT_COLUMN_MAX) in exc_info.value.message

    def test_odds_beyond_int_column(self) -> None:
        with pytest.raises(InvalidOddsError):
            validate_wager(_draft(odds=INT_COLUMN_MAX + 1))

    def test_price_at_numeric_max_ok(self) -> None:
        validate_wager(_draft(selling_price=PRICE_MAX))

    def test_price_beyond_numeric_column(self) -> None:
        with pytest.raises(InvalidSellingPriceError) as exc_info:
            validate_wager(_draft(selling_price=Decimal("10000000000.00")))
        assert exc_info.value.reason == "too high"
