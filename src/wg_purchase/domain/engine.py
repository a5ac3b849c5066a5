"""PurchaseEngine — one buyer takes one unit of a wager's resale inventory.

Flow (all steps after input validation run in ONE transaction):
  1. Reject wager_id <= 0 and buying_price <= 0 (or with > 2 decimals)
     before any transaction opens.
  2. SELECT ... FOR UPDATE the wager row. Concurrent buyers of the same
     wager queue here; buyers of other wagers never touch this lock.
  3. buying_price must not exceed current_selling_price.
  4. amount_sold + 1 must keep percentage_sold <= selling_percentage.
  5. UPDATE the wager (current_selling_price := buying_price), INSERT the
     purchase, commit. Any failure rolls everything back.

The engine keeps no state between calls; the row lock is the only
serialization point, so it is safe to run in many workers at once.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.wg_common.errors import (
    InvalidBuyingPriceError,
    InvalidWagerIdError,
    PriceExceededError,
    SoldOutError,
    WagerNotFoundError,
)
from src.wg_common.money import has_valid_scale, percentage_of
from src.wg_common.transaction import run_in_transaction
from src.wg_wager.domain.models import Purchase
from src.wg_wager.domain.repository import WagerRepositoryProtocol
from src.wg_wager.infrastructure.persistence import WagerRepository

logger = logging.getLogger(__name__)


def _validate_purchase_input(wager_id: int, buying_price: Decimal) -> None:
    if wager_id <= 0:
        raise InvalidWagerIdError()
    if not buying_price.is_finite() or buying_price <= 0:
        raise InvalidBuyingPriceError()
    if not has_valid_scale(buying_price):
        raise InvalidBuyingPriceError("must have at most 2 decimal places")


class PurchaseEngine:
    def __init__(
        self,
        repo: WagerRepositoryProtocol | None = None,
        lock_timeout_ms: int = settings.LOCK_TIMEOUT_MS,
    ) -> None:
        self._repo: WagerRepositoryProtocol = repo or WagerRepository()
        self._lock_timeout_ms = lock_timeout_ms

    async def purchase_wager(
        self, db: AsyncSession, wager_id: int, buying_price: Decimal
    ) -> Purchase:
        _validate_purchase_input(wager_id, buying_price)

        async def _work(tx: AsyncSession) -> Purchase:
            return await self._purchase_locked(tx, wager_id, buying_price)

        purchase = await run_in_transaction(db, _work)
        logger.info(
            "Purchase %d committed: wager=%d price=%s",
            purchase.id,
            wager_id,
            purchase.buying_price,
        )
        return purchase

    async def _purchase_locked(
        self, tx: AsyncSession, wager_id: int, buying_price: Decimal
    ) -> Purchase:
        wager = await self._repo.lock_for_update(tx, wager_id, self._lock_timeout_ms)
        if wager is None:
            raise WagerNotFoundError(wager_id)

        if buying_price > wager.current_selling_price:
            logger.info(
                "Purchase rejected: wager=%d price %s > ceiling %s",
                wager_id,
                buying_price,
                wager.current_selling_price,
            )
            raise PriceExceededError(buying_price, wager.current_selling_price)

        new_amount_sold = (wager.amount_sold or 0) + 1
        new_percentage_sold = percentage_of(new_amount_sold, wager.total_wager_value)
        if new_percentage_sold > wager.selling_percentage:
            logger.info(
                "Purchase rejected: wager=%d sold out at %d units",
                wager_id,
                wager.amount_sold or 0,
            )
            raise SoldOutError(wager_id, wager.selling_percentage)

        await self._repo.apply_purchase_update(
            tx,
            wager_id,
            new_current_selling_price=buying_price,
            new_amount_sold=new_amount_sold,
            new_percentage_sold=new_percentage_sold,
        )
        return await self._repo.insert_purchase(tx, wager_id, buying_price)
