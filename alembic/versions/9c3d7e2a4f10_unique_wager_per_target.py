"""unique_wager_per_target

Revision ID: 9c3d7e2a4f10
Revises: 5e1f0c7a2b91
Create Date: 2026-10-19 14:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9c3d7e2a4f10"
down_revision: Union[str, Sequence[str], None] = "5e1f0c7a2b91"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MATCH_ONLY = sa.text("prediction_type = 'match'")
LEAGUE_ONLY = sa.text("prediction_type = 'league'")


def upgrade() -> None:
    """Replace the lookup index with partial unique indexes per wager kind."""
    op.drop_index("ix_predictions_account_fixture", table_name="predictions")
    op.create_index(
        "uq_predictions_account_fixture",
        "predictions",
        ["account_id", "fixture_api_id"],
        unique=True,
        sqlite_where=MATCH_ONLY,
        postgresql_where=MATCH_ONLY,
    )
    op.create_index(
        "uq_predictions_account_league",
        "predictions",
        ["account_id", "league_id"],
        unique=True,
        sqlite_where=LEAGUE_ONLY,
        postgresql_where=LEAGUE_ONLY,
    )


def downgrade() -> None:
    """Restore the plain lookup index."""
    op.drop_index("uq_predictions_account_league", table_name="predictions")
    op.drop_index("uq_predictions_account_fixture", table_name="predictions")
    op.create_index(
        "ix_predictions_account_fixture",
        "predictions",
        ["account_id", "fixture_api_id"],
        unique=False,
    )
