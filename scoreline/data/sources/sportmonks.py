"""Client for the SportMonks football API (v3).

Documentation: https://docs.sportmonks.com/football

Requires ``SPORTMONKS_API_TOKEN``. League and team lists are cached in
Redis for ``settings.cache_ttl_reference`` seconds.
"""

import logging
from datetime import datetime
from typing import Any

import httpx

from scoreline.core.cache import cache_get_json, cache_set_json, generate_cache_key
from scoreline.core.config import settings
from scoreline.core.exceptions import ConfigurationError, SportMonksAPIError
from scoreline.core.http_client import get_http_client

logger = logging.getLogger(__name__)

FIXTURE_INCLUDES = ("participant", "league", "state", "venue", "round", "stage")


class SportMonksClient:
    """Client for api.sportmonks.com/v3/football."""

    def __init__(self, api_token: str | None = None, base_url: str | None = None):
        self.api_token = api_token if api_token is not None else settings.sportmonks_api_token
        self.base_url = (base_url or settings.sportmonks_base_url).rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_token)

    async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET ``endpoint`` with the API token attached."""
        if not self.api_token:
            raise ConfigurationError("API token not configured")

        query = {"api_token": self.api_token, **(params or {})}
        url = f"{self.base_url}{endpoint}"

        try:
            response = await get_http_client().get(url, params=query)
        except httpx.HTTPError as e:
            logger.warning(f"SportMonks request failed for {endpoint}: {e}")
            raise SportMonksAPIError(
                "Failed to reach SportMonks", details={"endpoint": endpoint}
            ) from e

        if response.status_code != 200:
            body = response.text[:500]
            logger.error(f"SportMonks API error {response.status_code} for {endpoint}: {body}")
            raise SportMonksAPIError(
                f"SportMonks API error: {response.status_code}",
                details={"status": response.status_code, "endpoint": endpoint},
            )

        result: dict[str, Any] = response.json()
        return result

    async def get_fixture(self, fixture_id: int) -> dict[str, Any]:
        """Raw fixture with participants, league, state, venue, round and stage."""
        data = await self._request(
            f"/fixtures/{fixture_id}", {"include": ",".join(FIXTURE_INCLUDES)}
        )
        fixture: dict[str, Any] = data.get("data") or {}
        return fixture

    async def _get_list(
        self,
        endpoint: str,
        *,
        page: int,
        per_page: int,
        includes: str,
        filters: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"include": includes, "page": page, "per_page": per_page}
        if filters:
            params["filters"] = filters

        cache_key = generate_cache_key(endpoint, params, prefix="sportmonks")
        cached = await cache_get_json(cache_key)
        if cached is not None:
            return cached  # type: ignore[no-any-return]

        data = await self._request(endpoint, params)
        result = {"data": data.get("data") or [], "pagination": data.get("pagination")}
        await cache_set_json(cache_key, result, settings.cache_ttl_reference)
        return result

    async def get_leagues(
        self, page: int = 1, per_page: int = 100, includes: str = "country"
    ) -> dict[str, Any]:
        listing = await self._get_list("/leagues", page=page, per_page=per_page, includes=includes)
        return {"leagues": listing["data"], "pagination": listing["pagination"]}

    async def get_teams(
        self,
        page: int = 1,
        per_page: int = 50,
        includes: str = "country",
        search: str | None = None,
    ) -> dict[str, Any]:
        listing = await self._get_list(
            "/teams",
            page=page,
            per_page=per_page,
            includes=includes,
            filters=f"teamSearch:{search}" if search else None,
        )
        return {"teams": listing["data"], "pagination": listing["pagination"]}


def _participant(fixture: dict[str, Any], location: str) -> dict[str, Any]:
    for participant in fixture.get("participant") or fixture.get("participants") or []:
        if (participant.get("meta") or {}).get("location") == location:
            return participant  # type: ignore[no-any-return]
    return {}


def _current_goals(fixture: dict[str, Any]) -> tuple[int | None, int | None]:
    scores = fixture.get("scores") or []
    if not scores:
        return None, None
    current = next((s for s in scores if s.get("description") == "CURRENT"), scores[0])
    goals = (current.get("score") or {}).get("goals") or {}
    return goals.get("home"), goals.get("away")


def parse_starting_at(value: str | None) -> datetime | None:
    """Parse SportMonks' ``YYYY-MM-DD HH:MM:SS`` (UTC)."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "")).replace(tzinfo=None)
    except ValueError:
        logger.warning(f"Unparseable SportMonks starting_at: {value}")
        return None


def fixture_values(fixture: dict[str, Any]) -> dict[str, Any]:
    """Map a SportMonks fixture onto fixture snapshot columns."""
    home = _participant(fixture, "home")
    away = _participant(fixture, "away")
    home_goals, away_goals = _current_goals(fixture)
    league = fixture.get("league") or {}
    state = fixture.get("state") or {}
    venue = fixture.get("venue") or {}

    return {
        "sport_id": fixture.get("sport_id"),
        "league_id": fixture.get("league_id"),
        "league_name": league.get("name"),
        "season_id": fixture.get("season_id"),
        "name": fixture.get("name") or "Match",
        "home_team_id": home.get("id"),
        "home_team_name": home.get("name"),
        "home_team_logo": home.get("image_path"),
        "away_team_id": away.get("id"),
        "away_team_name": away.get("name"),
        "away_team_logo": away.get("image_path"),
        "starting_at": parse_starting_at(fixture.get("starting_at")),
        "result_info": fixture.get("result_info"),
        "state_id": fixture.get("state_id"),
        "state_name": state.get("name"),
        "home_score": home_goals,
        "away_score": away_goals,
        "venue_id": venue.get("id"),
        "venue_name": venue.get("name"),
        "has_odds": bool(fixture.get("has_odds")),
    }


_client: SportMonksClient | None = None


def get_sportmonks_client() -> SportMonksClient:
    """Get the shared SportMonks client."""
    global _client
    if _client is None:
        _client = SportMonksClient()
    return _client
