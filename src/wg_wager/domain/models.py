"""Domain models for wg_wager — pure dataclasses, no I/O."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class WagerDraft:
    """Operator input for a new listing, before it has an id."""

    total_wager_value: int
    odds: int
    selling_percentage: int
    selling_price: Decimal


@dataclass
class Wager:
    id: int
    total_wager_value: int
    odds: int
    selling_percentage: int
    selling_price: Decimal
    current_selling_price: Decimal
    percentage_sold: int | None  # NULL until the first purchase
    amount_sold: int | None
    placed_at: datetime


@dataclass
class LockedWager:
    """Columns read under SELECT ... FOR UPDATE; only valid inside that transaction."""

    id: int
    total_wager_value: int
    selling_percentage: int
    current_selling_price: Decimal
    amount_sold: int | None


@dataclass
class Purchase:
    id: int
    wager_id: int
    buying_price: Decimal
    bought_at: datetime
