# src/wg_wager/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock (or the in-memory ledger fake) that conforms to
this Protocol. Infrastructure layer provides the PostgreSQL implementation.

Transaction ownership: none of these methods commit. Mutating calls and
lock_for_update must run inside the caller's run_in_transaction().
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.wg_wager.domain.models import LockedWager, Purchase, Wager, WagerDraft


class WagerRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, draft: WagerDraft) -> Wager: ...

    async def get_wager(self, db: AsyncSession, wager_id: int) -> Wager | None: ...

    async def list_after(
        self,
        db: AsyncSession,
        cursor_id: int,
        limit: int,
    ) -> tuple[list[Wager], int]: ...

    async def lock_for_update(
        self,
        db: AsyncSession,
        wager_id: int,
        lock_timeout_ms: int,
    ) -> LockedWager | None: ...

    async def apply_purchase_update(
        self,
        db: AsyncSession,
        wager_id: int,
        new_current_selling_price: Decimal,
        new_amount_sold: int,
        new_percentage_sold: int,
    ) -> None: ...

    async def insert_purchase(
        self,
        db: AsyncSession,
        wager_id: int,
        buying_price: Decimal,
    ) -> Purchase: ...
