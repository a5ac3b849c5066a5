"""wg_wager REST endpoints.

POST /wagers                 — list a wager for resale
GET  /wagers                 — catalog, cursor pagination (?page=<last id>&limit=)
GET  /wagers/{wager_id}      — single wager with live inventory
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.wg_common.database import get_db_session
from src.wg_common.response import ApiResponse, success_response
from src.wg_wager.application.schemas import PlaceWagerRequest
from src.wg_wager.application.service import WagerApplicationService

router = APIRouter(prefix="/wagers", tags=["wagers"])

_service = WagerApplicationService()


@router.post("", status_code=201)
async def place_wager(
    req: PlaceWagerRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.place_wager(db, req)
    return success_response(result.model_dump(mode="json"), request)


@router.get("")
async def list_wagers(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    page: int = Query(0, ge=0, description="Cursor: id of the last wager already seen"),
    limit: int = Query(settings.LIST_DEFAULT_LIMIT, ge=1, le=settings.LIST_MAX_LIMIT),
) -> ApiResponse:
    result = await _service.list_wagers(db, page, limit)
    return success_response(result.model_dump(mode="json"), request)


@router.get("/{wager_id}")
async def get_wager(
    wager_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_wager(db, wager_id)
    return success_response(result.model_dump(mode="json"), request)
