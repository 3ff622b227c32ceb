"""initial_schema

Revision ID: 5e1f0c7a2b91
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5e1f0c7a2b91"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, fixtures and predictions."""
    # --- accounts ---
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("nickname", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("coins", sa.Integer(), nullable=False),
        sa.Column("owned_items", sa.JSON(), nullable=False),
        sa.Column("badges", sa.JSON(), nullable=False),
        sa.Column("avatar", sa.String(length=100), nullable=False),
        sa.Column("profile_background", sa.String(length=100), nullable=False),
        sa.Column("avatar_frame", sa.String(length=100), nullable=False),
        sa.Column("victory_effect", sa.String(length=100), nullable=False),
        sa.Column("profile_title", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_accounts_email"), "accounts", ["email"], unique=True)
    op.create_index(op.f("ix_accounts_nickname"), "accounts", ["nickname"], unique=True)

    # --- fixtures ---
    op.create_table(
        "fixtures",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("api_id", sa.Integer(), nullable=False),
        sa.Column("sport_id", sa.Integer(), nullable=True),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.Column("league_name", sa.Text(), nullable=True),
        sa.Column("season_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("home_team_id", sa.Integer(), nullable=True),
        sa.Column("home_team_name", sa.Text(), nullable=True),
        sa.Column("home_team_logo", sa.Text(), nullable=True),
        sa.Column("away_team_id", sa.Integer(), nullable=True),
        sa.Column("away_team_name", sa.Text(), nullable=True),
        sa.Column("away_team_logo", sa.Text(), nullable=True),
        sa.Column("starting_at", sa.DateTime(), nullable=False),
        sa.Column("result_info", sa.Text(), nullable=True),
        sa.Column("state_id", sa.Integer(), nullable=True),
        sa.Column("state_name", sa.Text(), nullable=True),
        sa.Column("home_score", sa.Integer(), nullable=True),
        sa.Column("away_score", sa.Integer(), nullable=True),
        sa.Column("venue_id", sa.Integer(), nullable=True),
        sa.Column("venue_name", sa.Text(), nullable=True),
        sa.Column("has_odds", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_fixtures_api_id"), "fixtures", ["api_id"], unique=True)

    # --- predictions ---
    op.create_table(
        "predictions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("prediction_type", sa.String(length=10), nullable=False),
        sa.Column("fixture_id", sa.Integer(), nullable=True),
        sa.Column("fixture_api_id", sa.Integer(), nullable=True),
        sa.Column("predicted_home_score", sa.Integer(), nullable=True),
        sa.Column("predicted_away_score", sa.Integer(), nullable=True),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.Column("league_name", sa.Text(), nullable=True),
        sa.Column("predicted_winner_id", sa.Integer(), nullable=True),
        sa.Column("predicted_winner_name", sa.Text(), nullable=True),
        sa.Column("predicted_winner_logo", sa.Text(), nullable=True),
        sa.Column("coins_wagered", sa.Integer(), nullable=False),
        sa.Column("coins_won", sa.Integer(), nullable=False),
        sa.Column("verdict", sa.String(length=20), nullable=False),
        sa.Column("is_settled", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["fixture_id"], ["fixtures.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_predictions_account_id"), "predictions", ["account_id"], unique=False
    )
    op.create_index(
        "ix_predictions_account_settled",
        "predictions",
        ["account_id", "is_settled"],
        unique=False,
    )
    op.create_index(
        "ix_predictions_account_fixture",
        "predictions",
        ["account_id", "fixture_api_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_predictions_account_fixture", table_name="predictions")
    op.drop_index("ix_predictions_account_settled", table_name="predictions")
    op.drop_index(op.f("ix_predictions_account_id"), table_name="predictions")
    op.drop_table("predictions")
    op.drop_index(op.f("ix_fixtures_api_id"), table_name="fixtures")
    op.drop_table("fixtures")
    op.drop_index(op.f("ix_accounts_nickname"), table_name="accounts")
    op.drop_index(op.f("ix_accounts_email"), table_name="accounts")
    op.drop_table("accounts")
