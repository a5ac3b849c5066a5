# src/wg_purchase/application/schemas.py
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from src.wg_common.money import price_to_display, quantize_price, to_decimal
from src.wg_wager.application.schemas import WagerResponse
from src.wg_wager.domain.models import Purchase


class PurchaseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    buying_price: Decimal

    @field_validator("buying_price", mode="before")
    @classmethod
    def parse_price(cls, v: object) -> object:
        if isinstance(v, (str, int, float)) and not isinstance(v, bool):
            return to_decimal(v)
        return v


class PurchaseResponse(BaseModel):
    id: int
    wager_id: int
    buying_price: Decimal
    buying_price_display: str
    bought_at: str

    @classmethod
    def from_domain(cls, p: Purchase) -> "PurchaseResponse":
        return cls(
            id=p.id,
            wager_id=p.wager_id,
            buying_price=quantize_price(p.buying_price),
            buying_price_display=price_to_display(p.buying_price),
            bought_at=p.bought_at.isoformat(),
        )


class PurchaseResultResponse(BaseModel):
    purchase: PurchaseResponse
    wager: WagerResponse  # read after commit; may already include later purchases
