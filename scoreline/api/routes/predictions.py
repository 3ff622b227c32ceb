"""Wager endpoints: list, create and settle."""

import logging
from typing import Any, Literal, Self

from fastapi import APIRouter, Request, status
from pydantic import BaseModel, Field, model_validator

from scoreline.auth import AUTH_RESPONSES, GAME_RESPONSES, AuthenticatedUser, get_account_id
from scoreline.core.config import settings
from scoreline.core.rate_limit import RATE_LIMITS, limiter
from scoreline.db.services import PredictionService, SettlementService

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Models
# ============================================================================


class PredictionCreate(BaseModel):
    """Match (exact score) or league (winner) wager."""

    prediction_type: Literal["match", "league"] = "match"
    coins_wagered: int = Field(gt=0, description="Stake in coins")

    # Match wager
    fixture_api_id: int | None = Field(None, gt=0, description="SofaScore event id")
    predicted_home_score: int | None = Field(None, ge=0)
    predicted_away_score: int | None = Field(None, ge=0)

    # League wager
    league_id: int | None = Field(None, gt=0)
    league_name: str | None = None
    predicted_winner_id: int | None = Field(None, gt=0)
    predicted_winner_name: str | None = None
    predicted_winner_logo: str | None = None

    @model_validator(mode="after")
    def _check_required_fields(self) -> Self:
        if self.prediction_type == "league":
            if self.league_id is None or self.predicted_winner_id is None:
                raise ValueError("League ID and predicted winner ID are required")
            return self

        if (
            self.fixture_api_id is None
            or self.predicted_home_score is None
            or self.predicted_away_score is None
        ):
            raise ValueError("fixture_api_id and both predicted scores are required")
        limit = settings.max_predicted_score
        if self.predicted_home_score > limit or self.predicted_away_score > limit:
            raise ValueError(f"Predicted scores must be between 0 and {limit}")
        return self


class SettlementResult(BaseModel):
    prediction_id: int
    fixture_api_id: int
    predicted: str
    actual: str
    verdict: str
    coins_won: int


class SettlementResponse(BaseModel):
    message: str
    settled_count: int
    total_coins_won: int
    results: list[SettlementResult]


# ============================================================================
# Endpoints
# ============================================================================


@router.get("", responses=AUTH_RESPONSES)
async def list_predictions(user: AuthenticatedUser) -> dict[str, Any]:
    """Caller's predictions, newest first."""
    return {"predictions": await PredictionService.list_predictions(get_account_id(user))}


@router.post("", status_code=status.HTTP_201_CREATED, responses=GAME_RESPONSES)
@limiter.limit(RATE_LIMITS["wagers"])
async def create_prediction(
    request: Request, body: PredictionCreate, user: AuthenticatedUser
) -> dict[str, Any]:
    """Place a wager; the stake is debited immediately."""
    account_id = get_account_id(user)

    if body.prediction_type == "league":
        assert body.league_id is not None and body.predicted_winner_id is not None
        return await PredictionService.create_league_prediction(
            account_id=account_id,
            league_id=body.league_id,
            predicted_winner_id=body.predicted_winner_id,
            coins_wagered=body.coins_wagered,
            league_name=body.league_name,
            predicted_winner_name=body.predicted_winner_name,
            predicted_winner_logo=body.predicted_winner_logo,
        )

    assert body.fixture_api_id is not None
    assert body.predicted_home_score is not None and body.predicted_away_score is not None
    return await PredictionService.create_match_prediction(
        account_id=account_id,
        fixture_api_id=body.fixture_api_id,
        predicted_home_score=body.predicted_home_score,
        predicted_away_score=body.predicted_away_score,
        coins_wagered=body.coins_wagered,
    )


@router.post("/settle", response_model=SettlementResponse, responses=AUTH_RESPONSES)
@limiter.limit(RATE_LIMITS["wagers"])
async def settle_predictions(request: Request, user: AuthenticatedUser) -> dict[str, Any]:
    """Settle the caller's pending match wagers whose games have finished."""
    return await SettlementService.settle_for_account(get_account_id(user))
