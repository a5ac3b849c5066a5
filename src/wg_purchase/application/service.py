# src/wg_purchase/application/service.py
from sqlalchemy.ext.asyncio import AsyncSession

from src.wg_purchase.application.schemas import (
    PurchaseRequest,
    PurchaseResponse,
    PurchaseResultResponse,
)
from src.wg_purchase.domain.engine import PurchaseEngine
from src.wg_wager.application.service import WagerApplicationService
from src.wg_wager.infrastructure.persistence import WagerRepository

_repo = WagerRepository()
_engine = PurchaseEngine(repo=_repo)
_wagers = WagerApplicationService(repo=_repo)


async def buy_wager(
    wager_id: int, req: PurchaseRequest, db: AsyncSession
) -> PurchaseResultResponse:
    purchase = await _engine.purchase_wager(db, wager_id, req.buying_price)
    wager = await _wagers.get_wager(db, wager_id)
    return PurchaseResultResponse(
        purchase=PurchaseResponse.from_domain(purchase),
        wager=wager,
    )
