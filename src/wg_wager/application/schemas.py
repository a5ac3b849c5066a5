"""Pydantic schemas for wg_wager requests and responses.

Cursor format: the plain integer id of the last wager on the previous page
(ids are BIGSERIAL, so they are already a stable ascending sort key).
Decimals serialize as strings ("10.00") in JSON mode.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from src.wg_common.money import price_to_display, quantize_price, to_decimal
from src.wg_wager.domain.models import Wager, WagerDraft


class PlaceWagerRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_wager_value: int
    odds: int
    selling_percentage: int
    selling_price: Decimal

    @field_validator("selling_price", mode="before")
    @classmethod
    def parse_price(cls, v: object) -> object:
        # 10.111 as a JSON float must reach the scale check as Decimal("10.111")
        if isinstance(v, (str, int, float)) and not isinstance(v, bool):
            return to_decimal(v)
        return v

    def to_draft(self) -> WagerDraft:
        return WagerDraft(
            total_wager_value=self.total_wager_value,
            odds=self.odds,
            selling_percentage=self.selling_percentage,
            selling_price=self.selling_price,
        )


class WagerResponse(BaseModel):
    id: int
    total_wager_value: int
    odds: int
    selling_percentage: int
    selling_price: Decimal
    current_selling_price: Decimal
    current_selling_price_display: str
    percentage_sold: int | None
    amount_sold: int | None
    placed_at: str

    @classmethod
    def from_domain(cls, w: Wager) -> "WagerResponse":
        return cls(
            id=w.id,
            total_wager_value=w.total_wager_value,
            odds=w.odds,
            selling_percentage=w.selling_percentage,
            selling_price=quantize_price(w.selling_price),
            current_selling_price=quantize_price(w.current_selling_price),
            current_selling_price_display=price_to_display(w.current_selling_price),
            percentage_sold=w.percentage_sold,
            amount_sold=w.amount_sold,
            placed_at=w.placed_at.isoformat(),
        )


class WagerListResponse(BaseModel):
    items: list[WagerResponse]
    next_cursor: int  # 0 when the page is empty
