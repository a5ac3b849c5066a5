"""002: create purchases table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE purchases (
            id              BIGSERIAL       PRIMARY KEY,
            wager_id        BIGINT          NOT NULL REFERENCES wagers (id),
            buying_price    NUMERIC(12, 2)  NOT NULL,
            bought_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_purchases_buying_price_gt_0 CHECK (buying_price > 0)
        );
    """)
    op.execute("CREATE INDEX idx_purchases_wager_id ON purchases (wager_id);")
    op.execute("COMMENT ON TABLE purchases IS 'Append-only record of completed wager purchases';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS purchases CASCADE;")
