"""wg_purchase REST endpoints.

POST /buy/{wager_id}   — buy one unit of a wager at buying_price
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.wg_common.database import get_db_session
from src.wg_common.response import ApiResponse, success_response
from src.wg_purchase.application import service as svc
from src.wg_purchase.application.schemas import PurchaseRequest

router = APIRouter(prefix="/buy", tags=["purchases"])


@router.post("/{wager_id}", status_code=201)
async def buy_wager(
    wager_id: int,
    req: PurchaseRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await svc.buy_wager(wager_id, req, db)
    return success_response(result.model_dump(mode="json"), request)
