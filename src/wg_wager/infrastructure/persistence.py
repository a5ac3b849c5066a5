"""WagerRepository — PostgreSQL implementation of WagerRepositoryProtocol.

All queries use raw text() SQL (no ORM). Nothing is cached between calls:
every read that feeds a mutation happens inside the caller's transaction,
under the row lock taken by lock_for_update().

Transaction ownership: the CALLER wraps mutating calls in run_in_transaction().
Driver errors are re-raised as PersistenceError (LockTimeoutError for
SQLSTATE 55P03 while waiting on a row lock).
"""

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import TextClause, text
from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.wg_common.errors import InternalError, LockTimeoutError, PersistenceError
from src.wg_common.money import quantize_price
from src.wg_wager.domain.models import LockedWager, Purchase, Wager, WagerDraft

logger = logging.getLogger(__name__)

LOCK_NOT_AVAILABLE = "55P03"

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_WAGER_COLUMNS = """
    id, total_wager_value, odds, selling_percentage,
    selling_price, current_selling_price,
    percentage_sold, amount_sold, placed_at
"""

_INSERT_WAGER_SQL = text(f"""
    INSERT INTO wagers
        (total_wager_value, odds, selling_percentage,
         selling_price, current_selling_price)
    VALUES
        (:total_wager_value, :odds, :selling_percentage,
         :selling_price, :selling_price)
    RETURNING {_WAGER_COLUMNS}
""")

_GET_WAGER_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE id = :wager_id
""")

_LIST_WAGERS_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE id > :cursor_id
    ORDER BY id ASC
    LIMIT :limit
""")

_LOCK_WAGER_SQL = text("""
    SELECT id, total_wager_value, selling_percentage,
           current_selling_price, amount_sold
    FROM wagers
    WHERE id = :wager_id
    FOR UPDATE
""")

_APPLY_PURCHASE_SQL = text("""
    UPDATE wagers
    SET current_selling_price = :current_selling_price,
        amount_sold = :amount_sold,
        percentage_sold = :percentage_sold
    WHERE id = :wager_id
""")

_INSERT_PURCHASE_SQL = text("""
    INSERT INTO purchases (wager_id, buying_price)
    VALUES (:wager_id, :buying_price)
    RETURNING id, wager_id, buying_price, bought_at
""")


def _set_lock_timeout_sql(lock_timeout_ms: int) -> TextClause:
    # SET does not accept bind parameters; int() keeps the literal safe.
    return text(f"SET LOCAL lock_timeout = '{int(lock_timeout_ms)}ms'")


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_wager(row: Any) -> Wager:
    return Wager(
        id=row.id,
        total_wager_value=row.total_wager_value,
        odds=row.odds,
        selling_percentage=row.selling_percentage,
        selling_price=Decimal(row.selling_price),
        current_selling_price=Decimal(row.current_selling_price),
        percentage_sold=row.percentage_sold,
        amount_sold=row.amount_sold,
        placed_at=row.placed_at,
    )


def _row_to_locked(row: Any) -> LockedWager:
    return LockedWager(
        id=row.id,
        total_wager_value=row.total_wager_value,
        selling_percentage=row.selling_percentage,
        current_selling_price=Decimal(row.current_selling_price),
        amount_sold=row.amount_sold,
    )


def _row_to_purchase(row: Any) -> Purchase:
    return Purchase(
        id=row.id,
        wager_id=row.wager_id,
        buying_price=Decimal(row.buying_price),
        bought_at=row.bought_at,
    )


def _sqlstate(exc: DBAPIError) -> str | None:
    """SQLSTATE of the driver error, looking through the asyncpg adapter."""
    for candidate in (exc.orig, getattr(exc.orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


async def _execute(db: AsyncSession, stmt: TextClause, params: dict[str, Any]) -> Result[Any]:
    try:
        return await db.execute(stmt, params)
    except SQLAlchemyError as exc:
        logger.warning("Wager store query failed: %r", exc)
        raise PersistenceError(f"Storage error: {exc.__class__.__name__}") from exc


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class WagerRepository:
    async def create(self, db: AsyncSession, draft: WagerDraft) -> Wager:
        result = await _execute(
            db,
            _INSERT_WAGER_SQL,
            {
                "total_wager_value": draft.total_wager_value,
                "odds": draft.odds,
                "selling_percentage": draft.selling_percentage,
                "selling_price": quantize_price(draft.selling_price),
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("INSERT INTO wagers returned no row")
        return _row_to_wager(row)

    async def get_wager(self, db: AsyncSession, wager_id: int) -> Wager | None:
        result = await _execute(db, _GET_WAGER_SQL, {"wager_id": wager_id})
        row = result.fetchone()
        return _row_to_wager(row) if row else None

    async def list_after(
        self, db: AsyncSession, cursor_id: int, limit: int
    ) -> tuple[list[Wager], int]:
        result = await _execute(
            db, _LIST_WAGERS_SQL, {"cursor_id": cursor_id, "limit": limit}
        )
        wagers = [_row_to_wager(row) for row in result.fetchall()]
        if not wagers:
            return [], 0
        return wagers, wagers[-1].id

    async def lock_for_update(
        self, db: AsyncSession, wager_id: int, lock_timeout_ms: int
    ) -> LockedWager | None:
        try:
            await db.execute(_set_lock_timeout_sql(lock_timeout_ms))
            result = await db.execute(_LOCK_WAGER_SQL, {"wager_id": wager_id})
        except DBAPIError as exc:
            if _sqlstate(exc) == LOCK_NOT_AVAILABLE:
                logger.warning(
                    "Lock wait on wager %s exceeded %dms", wager_id, lock_timeout_ms
                )
                raise LockTimeoutError(wager_id) from exc
            raise PersistenceError(f"Storage error: {exc.__class__.__name__}") from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Storage error: {exc.__class__.__name__}") from exc
        row = result.fetchone()
        return _row_to_locked(row) if row else None

    async def apply_purchase_update(
        self,
        db: AsyncSession,
        wager_id: int,
        new_current_selling_price: Decimal,
        new_amount_sold: int,
        new_percentage_sold: int,
    ) -> None:
        result = await _execute(
            db,
            _APPLY_PURCHASE_SQL,
            {
                "wager_id": wager_id,
                "current_selling_price": quantize_price(new_current_selling_price),
                "amount_sold": new_amount_sold,
                "percentage_sold": new_percentage_sold,
            },
        )
        # The row is locked by this transaction, so it cannot have vanished.
        if result.rowcount != 1:  # type: ignore[attr-defined]
            raise InternalError(f"Locked wager {wager_id} was not updated")

    async def insert_purchase(
        self, db: AsyncSession, wager_id: int, buying_price: Decimal
    ) -> Purchase:
        result = await _execute(
            db,
            _INSERT_PURCHASE_SQL,
            {"wager_id": wager_id, "buying_price": quantize_price(buying_price)},
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("INSERT INTO purchases returned no row")
        return _row_to_purchase(row)
