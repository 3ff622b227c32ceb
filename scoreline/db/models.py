"""SQLAlchemy database models."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):  # type: ignore[misc]
    """Base class for all models."""

    pass


VERDICT_PENDING = "pending"
VERDICT_WIN = "win"
VERDICT_LOSE = "lose"

PREDICTION_MATCH = "match"
PREDICTION_LEAGUE = "league"


class Account(Base):
    """Registered player: credentials, coin balance and cosmetics."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    nickname: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    coins: Mapped[int] = mapped_column(Integer, nullable=False, default=100)

    # Inventory (shop item ids, badge ids)
    owned_items: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    badges: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Equip pointers: a sentinel or an owned item id of the matching category
    avatar: Mapped[str] = mapped_column(String(100), nullable=False, default="default")
    profile_background: Mapped[str] = mapped_column(String(100), nullable=False, default="default")
    avatar_frame: Mapped[str] = mapped_column(String(100), nullable=False, default="none")
    victory_effect: Mapped[str] = mapped_column(String(100), nullable=False, default="none")
    profile_title: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    predictions: Mapped[list["Prediction"]] = relationship(
        "Prediction", back_populates="account"
    )

    def equipped(self) -> dict[str, Any]:
        """Current equip pointers keyed by column name."""
        return {
            "avatar": self.avatar,
            "profile_background": self.profile_background,
            "avatar_frame": self.avatar_frame,
            "victory_effect": self.victory_effect,
            "profile_title": self.profile_title,
        }


class Fixture(Base):
    """Local snapshot of one external match."""

    __tablename__ = "fixtures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    api_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)
    sport_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    league_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    league_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    season_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)  # "Home vs Away"

    home_team_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    home_team_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    home_team_logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    away_team_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_team_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    away_team_logo: Mapped[str | None] = mapped_column(Text, nullable=True)

    starting_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    result_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    state_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    state_name: Mapped[str | None] = mapped_column(Text, nullable=True)  # "FT", "NS", "Ended"

    # Results (null until known)
    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    venue_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    venue_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_odds: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    predictions: Mapped[list["Prediction"]] = relationship(
        "Prediction", back_populates="fixture"
    )


class Prediction(Base):
    """A wager on an exact match score or on a league winner."""

    __tablename__ = "predictions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    prediction_type: Mapped[str] = mapped_column(
        String(10), nullable=False, default=PREDICTION_MATCH
    )  # match, league

    # Match wager
    fixture_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("fixtures.id", ondelete="CASCADE"), nullable=True
    )
    fixture_api_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    predicted_home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    predicted_away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # League wager
    league_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    league_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    predicted_winner_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    predicted_winner_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    predicted_winner_logo: Mapped[str | None] = mapped_column(Text, nullable=True)

    coins_wagered: Mapped[int] = mapped_column(Integer, nullable=False)
    coins_won: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    verdict: Mapped[str] = mapped_column(String(20), nullable=False, default=VERDICT_PENDING)
    is_settled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    account: Mapped["Account"] = relationship("Account", back_populates="predictions")
    fixture: Mapped[Optional["Fixture"]] = relationship("Fixture", back_populates="predictions")

    # Indexes
    __table_args__ = (
        Index("ix_predictions_account_settled", "account_id", "is_settled"),
        # One match wager per fixture and one league wager per league, per account
        Index(
            "uq_predictions_account_fixture",
            "account_id",
            "fixture_api_id",
            unique=True,
            sqlite_where=text("prediction_type = 'match'"),
            postgresql_where=text("prediction_type = 'match'"),
        ),
        Index(
            "uq_predictions_account_league",
            "account_id",
            "league_id",
            unique=True,
            sqlite_where=text("prediction_type = 'league'"),
            postgresql_where=text("prediction_type = 'league'"),
        ),
    )

    @property
    def predicted_score(self) -> str | None:
        """Predicted scoreline as "H - A", None for league wagers."""
        if self.predicted_home_score is None or self.predicted_away_score is None:
            return None
        return f"{self.predicted_home_score} - {self.predicted_away_score}"
