"""Listing rules checked before a wager is persisted.

Order matters: the first failing check wins, mirroring what the operator
sees when several fields are wrong at once.

Upper bounds follow the column types in 001_create_wagers.py
(INT for total_wager_value and odds, NUMERIC(12, 2) for selling_price), so
a wager that passes here always fits its row.
"""

from src.wg_common.errors import (
    InvalidOddsError,
    InvalidSellingPercentageError,
    InvalidSellingPriceError,
    InvalidTotalWagerValueError,
)
from src.wg_common.money import PRICE_MAX, has_valid_scale, min_selling_price
from src.wg_wager.domain.models import WagerDraft

INT_COLUMN_MAX = 2**31 - 1


def validate_wager(draft: WagerDraft) -> None:
    if draft.total_wager_value <= 0:
        raise InvalidTotalWagerValueError()
    if draft.total_wager_value > INT_COLUMN_MAX:
        raise InvalidTotalWagerValueError(f"must be at most {INT_COLUMN_MAX}")

    if draft.odds <= 0:
        raise InvalidOddsError()
    if draft.odds > INT_COLUMN_MAX:
        raise InvalidOddsError(f"must be at most {INT_COLUMN_MAX}")

    if not (0 < draft.selling_percentage <= 100):
        raise InvalidSellingPercentageError()

    # scale check only; 10.111 is rejected, never rounded to 10.11
    if not draft.selling_price.is_finite() or not has_valid_scale(draft.selling_price):
        raise InvalidSellingPriceError("scale")
    if draft.selling_price > PRICE_MAX:
        raise InvalidSellingPriceError("too high")

    floor_price = min_selling_price(draft.total_wager_value, draft.selling_percentage)
    if draft.selling_price < floor_price:
        raise InvalidSellingPriceError("too low")
