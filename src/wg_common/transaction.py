"""Scoped unit of work over an AsyncSession.

run_in_transaction() is the single place where mutating operations commit or
roll back. Exactly one of the two runs per call:

  - work() raises (including CancelledError) -> rollback, re-raise the
    ORIGINAL exception. A failing rollback is logged and attached as a note.
  - work() returns -> commit. A failing commit is rolled back and surfaced
    as PersistenceError chained to the driver error; cancellation during the
    commit also rolls back and re-raises.

Raw SQLAlchemy errors escaping work() are translated to PersistenceError so
callers only ever see AppError subclasses.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.wg_common.errors import AppError, PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _rollback_quietly(db: AsyncSession, original: BaseException) -> None:
    try:
        await db.rollback()
    except Exception as rb_exc:  # noqa: BLE001
        logger.error("Rollback failed after %r: %r", original, rb_exc)
        original.add_note(f"rollback also failed: {rb_exc!r}")


async def run_in_transaction(
    db: AsyncSession,
    work: Callable[[AsyncSession], Awaitable[T]],
) -> T:
    try:
        result = await work(db)
    except AppError as exc:
        await _rollback_quietly(db, exc)
        raise
    except SQLAlchemyError as exc:
        await _rollback_quietly(db, exc)
        raise PersistenceError(f"Storage error: {exc.__class__.__name__}") from exc
    except BaseException as exc:
        await _rollback_quietly(db, exc)
        raise

    try:
        await db.commit()
    except SQLAlchemyError as exc:
        logger.warning("Commit failed, transaction not applied: %r", exc)
        await _rollback_quietly(db, exc)
        raise PersistenceError("Commit failed; the operation was not applied") from exc
    except BaseException as exc:
        await _rollback_quietly(db, exc)
        raise
    return result
