# tests/integration/test_wager_flow.py
"""End-to-end wager flow against PostgreSQL.

Requires Docker (postgres) + migrations (alembic upgrade head).
"""

import asyncio
from decimal import Decimal

import pytest

from src.wg_common.errors import PriceExceededError, SoldOutError, WagerNotFoundError
from src.wg_purchase.domain.engine import PurchaseEngine
from src.wg_wager.application.schemas import PlaceWagerRequest
from src.wg_wager.application.service import WagerApplicationService
from src.wg_wager.domain.models import Purchase

pytestmark = [pytest.mark.asyncio(loop_scope="session"), pytest.mark.integration]


async def _place(session_factory, **kwargs) -> int:
    fields = dict(total_wager_value=100, odds=1, selling_percentage=10, selling_price="10.00")
    fields.update(kwargs)
    async with session_factory() as db:
        resp = await WagerApplicationService().place_wager(db, PlaceWagerRequest(**fields))
    return resp.id


async def _buy(session_factory, wager_id: int, price: str):
    async with session_factory() as db:
        try:
            return await PurchaseEngine().purchase_wager(db, wager_id, Decimal(price))
        except (SoldOutError, PriceExceededError) as exc:
            return exc


class TestHttpFlow:
    async def test_place_buy_and_price_ceiling(self, live_client):
        resp = await live_client.post("/wagers", json={
            "total_wager_value": 100, "odds": 1,
            "selling_percentage": 10, "selling_price": "10.00",
        })
        assert resp.status_code == 201
        wager = resp.json()["data"]
        assert wager["current_selling_price"] == "10.00"
        assert wager["amount_sold"] is None

        resp = await live_client.post(f"/buy/{wager['id']}", json={"buying_price": "10.00"})
        assert resp.status_code == 201
        assert resp.json()["data"]["wager"]["amount_sold"] == 1

        resp = await live_client.post(f"/buy/{wager['id']}", json={"buying_price": "10.01"})
        assert resp.status_code == 422
        assert resp.json()["code"] == 3001

    async def test_scale_rejected(self, live_client):
        resp = await live_client.post("/wagers", json={
            "total_wager_value": 100, "odds": 1,
            "selling_percentage": 10, "selling_price": "10.111",
        })
        assert resp.status_code == 400
        assert resp.json()["code"] == 1006

    async def test_large_listing_is_stored(self, live_client):
        resp = await live_client.post("/wagers", json={
            "total_wager_value": 30_000_000, "odds": 1,
            "selling_percentage": 100, "selling_price": "30000000.00",
        })
        assert resp.status_code == 201
        assert resp.json()["data"]["selling_price"] == "30000000.00"

    async def test_total_beyond_column_is_400(self, live_client):
        resp = await live_client.post("/wagers", json={
            "total_wager_value": 3_000_000_000, "odds": 1,
            "selling_percentage": 1, "selling_price": "30000000.00",
        })
        assert resp.status_code == 400
        assert resp.json()["code"] == 1003


class TestPagination:
    async def test_pages_are_disjoint_and_ascending(self, session_factory):
        created = [await _place(session_factory) for _ in range(5)]
        cursor = created[0] - 1
        seen: list[int] = []

        while True:
            async with session_factory() as db:
                page = await WagerApplicationService().list_wagers(db, cursor, 2)
            if not page.items:
                assert page.next_cursor == 0
                break
            ids = [w.id for w in page.items]
            assert ids == sorted(ids)
            assert all(i > cursor for i in ids)
            assert page.next_cursor == ids[-1]
            seen.extend(ids)
            cursor = page.next_cursor

        assert len(seen) == len(set(seen))
        assert [i for i in seen if i in created] == created


class TestConcurrentPurchases:
    async def test_capacity_respected_under_contention(self, session_factory):
        wager_id = await _place(session_factory)  # 10 units of capacity

        results = await asyncio.gather(*[_buy(session_factory, wager_id, "10.00") for _ in range(20)])

        successes = [r for r in results if isinstance(r, Purchase)]
        assert len(successes) == 10
        assert all(isinstance(r, SoldOutError) for r in results if not isinstance(r, Purchase))
        async with session_factory() as db:
            wager = await WagerApplicationService().get_wager(db, wager_id)
        assert wager.amount_sold == 10
        assert wager.percentage_sold == 10

    async def test_unknown_wager(self, session_factory):
        async with session_factory() as db:
            with pytest.raises(WagerNotFoundError):
                await PurchaseEngine().purchase_wager(db, 2**62, Decimal("1.00"))
