"""WagerApplicationService — listing creation and the catalog reader.

place_wager re-checks every listing rule before opening a transaction, then
inserts through run_in_transaction(). list_wagers is read-only and needs no
commit/rollback.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.wg_common.errors import (
    InvalidPaginationError,
    InvalidWagerIdError,
    WagerNotFoundError,
)
from src.wg_common.transaction import run_in_transaction
from src.wg_wager.application.schemas import (
    PlaceWagerRequest,
    WagerListResponse,
    WagerResponse,
)
from src.wg_wager.domain.repository import WagerRepositoryProtocol
from src.wg_wager.domain.rules import validate_wager
from src.wg_wager.infrastructure.persistence import WagerRepository

logger = logging.getLogger(__name__)


class WagerApplicationService:
    def __init__(
        self,
        repo: WagerRepositoryProtocol | None = None,
        max_limit: int = settings.LIST_MAX_LIMIT,
    ) -> None:
        self._repo: WagerRepositoryProtocol = repo or WagerRepository()
        self._max_limit = max_limit

    async def place_wager(self, db: AsyncSession, req: PlaceWagerRequest) -> WagerResponse:
        draft = req.to_draft()
        validate_wager(draft)

        wager = await run_in_transaction(db, lambda s: self._repo.create(s, draft))
        logger.info(
            "Wager %d placed: total=%d odds=%d selling=%d%% @ %s",
            wager.id,
            wager.total_wager_value,
            wager.odds,
            wager.selling_percentage,
            wager.selling_price,
        )
        return WagerResponse.from_domain(wager)

    async def list_wagers(
        self, db: AsyncSession, cursor_id: int, limit: int
    ) -> WagerListResponse:
        if cursor_id < 0:
            raise InvalidPaginationError("cursor must be >= 0")
        if not (1 <= limit <= self._max_limit):
            raise InvalidPaginationError(f"limit must be between 1 and {self._max_limit}")

        wagers, next_cursor = await self._repo.list_after(db, cursor_id, limit)
        return WagerListResponse(
            items=[WagerResponse.from_domain(w) for w in wagers],
            next_cursor=next_cursor,
        )

    async def get_wager(self, db: AsyncSession, wager_id: int) -> WagerResponse:
        if wager_id <= 0:
            raise InvalidWagerIdError()
        wager = await self._repo.get_wager(db, wager_id)
        if wager is None:
            raise WagerNotFoundError(wager_id)
        return WagerResponse.from_domain(wager)
