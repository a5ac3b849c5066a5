"""001: create wagers table

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wagers (
            id                      BIGSERIAL       PRIMARY KEY,
            total_wager_value       INT             NOT NULL,
            odds                    INT             NOT NULL,
            selling_percentage      SMALLINT        NOT NULL,
            selling_price           NUMERIC(12, 2)  NOT NULL,
            current_selling_price   NUMERIC(12, 2)  NOT NULL,
            percentage_sold         SMALLINT,
            amount_sold             INT,
            placed_at               TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_wagers_total_gt_0             CHECK (total_wager_value > 0),
            CONSTRAINT ck_wagers_odds_gt_0              CHECK (odds > 0),
            CONSTRAINT ck_wagers_selling_percentage     CHECK (
                selling_percentage > 0 AND selling_percentage <= 100
            ),
            CONSTRAINT ck_wagers_selling_price_floor    CHECK (
                selling_price >= (total_wager_value::BIGINT * selling_percentage / 100)
            ),
            CONSTRAINT ck_wagers_current_price_gt_0     CHECK (current_selling_price > 0),
            CONSTRAINT ck_wagers_amount_sold_gte_0      CHECK (amount_sold IS NULL OR amount_sold >= 0),
            CONSTRAINT ck_wagers_percentage_sold_cap    CHECK (
                percentage_sold IS NULL
                OR (percentage_sold >= 0 AND percentage_sold <= selling_percentage)
            )
        );
    """)
    op.execute("COMMENT ON TABLE wagers IS 'Wagers listed for resale — static terms plus live inventory';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wagers CASCADE;")
