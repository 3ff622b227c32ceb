"""Fixture and league data service.

Fixture details come from the local cache first and SportMonks second;
every SportMonks fetch refreshes the cache. Standings are read from
SofaScore, resolving the current season when none is given.
"""

import logging
from datetime import date
from typing import Any

from scoreline.core.exceptions import NotFoundError, SportMonksAPIError
from scoreline.data.sources.sofascore import get_sofascore_client, scheduled_events_url
from scoreline.data.sources.sportmonks import fixture_values, get_sportmonks_client
from scoreline.db.models import Fixture
from scoreline.db.repositories.unit_of_work import get_uow

logger = logging.getLogger(__name__)


def _fixture_detail(fixture: Fixture) -> dict[str, Any]:
    return {
        "id": fixture.api_id,
        "name": fixture.name,
        "starting_at": fixture.starting_at.isoformat() if fixture.starting_at else None,
        "state": fixture.state_name or "Unknown",
        "state_id": fixture.state_id,
        "home_team": {
            "id": fixture.home_team_id,
            "name": fixture.home_team_name,
            "logo": fixture.home_team_logo,
            "score": fixture.home_score,
        },
        "away_team": {
            "id": fixture.away_team_id,
            "name": fixture.away_team_name,
            "logo": fixture.away_team_logo,
            "score": fixture.away_score,
        },
        "league": {"id": fixture.league_id, "name": fixture.league_name, "logo": None},
        "venue": {"id": fixture.venue_id, "name": fixture.venue_name, "city": None},
        # Not available on the free SportMonks plan
        "statistics": [],
        "events": [],
        "lineups": [],
    }


class FixtureService:
    """Service for fixture details and league standings."""

    @staticmethod
    def scheduled_events_hint(date_from: date | None = None) -> dict[str, Any]:
        """Where clients should read a day's fixtures from."""
        day = (date_from or date.today()).isoformat()
        return {
            "message": "Fetch directly from SofaScore on the client",
            "endpoint": scheduled_events_url(day),
            "note": "Use the dashboard's direct fetch pattern",
        }

    @staticmethod
    async def get_fixture(fixture_id: int) -> dict[str, Any]:
        """Cached fixture, or SportMonks' copy which is then cached."""
        async with get_uow() as uow:
            cached = await uow.fixtures.get_by_api_id(fixture_id)
            if cached is not None:
                return _fixture_detail(cached)

        try:
            raw = await get_sportmonks_client().get_fixture(fixture_id)
        except SportMonksAPIError as e:
            if e.upstream_status == 404:
                raise NotFoundError("Match not found", details={"fixture_id": fixture_id}) from e
            raise

        values = fixture_values(raw)
        api_id = raw.get("id") or fixture_id
        if values["starting_at"] is None:
            logger.warning(f"SportMonks fixture {api_id} has no start time, not caching")
            return _fixture_detail(Fixture(api_id=api_id, **values))

        async with get_uow() as uow:
            fixture = await uow.fixtures.upsert_by_api_id(api_id, **values)
            await uow.commit()
            detail = _fixture_detail(fixture)

        league = raw.get("league") or {}
        venue = raw.get("venue") or {}
        detail["league"]["logo"] = league.get("image_path")
        detail["venue"]["city"] = venue.get("city_name")
        return detail

    @staticmethod
    async def get_standings(league_id: int, season_id: int | None = None) -> dict[str, Any]:
        """Total standings; the current season is looked up when none is given."""
        client = get_sofascore_client()

        if season_id is not None:
            return {"standings": await client.get_standings(league_id, season_id)}

        seasons = await client.get_seasons(league_id)
        if not seasons:
            raise NotFoundError(
                "No seasons found for this league", details={"league_id": league_id}
            )

        current = seasons[0]
        standings = await client.get_standings(league_id, current["id"])
        return {"standings": standings, "season": current}
