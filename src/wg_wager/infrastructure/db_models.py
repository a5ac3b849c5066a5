"""SQLAlchemy ORM models for the wagers and purchases tables.

Used for type reference only — persistence.py uses raw text() SQL.
Alembic migrations (001_create_wagers.py, 002_create_purchases.py) are the
authoritative DDL source.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from src.wg_common.database import Base


class WagerORM(Base):
    __tablename__ = "wagers"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    total_wager_value: Mapped[int] = mapped_column(Integer, nullable=False)
    odds: Mapped[int] = mapped_column(Integer, nullable=False)
    selling_percentage: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    selling_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    current_selling_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    percentage_sold: Mapped[int | None] = mapped_column(SmallInteger)
    amount_sold: Mapped[int | None] = mapped_column(Integer)
    placed_at: Mapped[datetime] = mapped_column(nullable=False)


class PurchaseORM(Base):
    __tablename__ = "purchases"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    wager_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("wagers.id"), nullable=False, index=True
    )
    buying_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    bought_at: Mapped[datetime] = mapped_column(nullable=False)
