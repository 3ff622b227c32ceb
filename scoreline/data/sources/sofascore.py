"""Client for the public SofaScore API.

No authentication. Every outgoing request waits on a process-wide
interval limiter so settlement runs and passthrough routes never hammer
the upstream.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import BaseModel

from scoreline.core.cache import cache_get_json, cache_set_json, generate_cache_key
from scoreline.core.config import settings
from scoreline.core.exceptions import SofaScoreAPIError
from scoreline.core.http_client import get_http_client

logger = logging.getLogger(__name__)

# SofaScore status code for a finished match
STATUS_FINISHED = 100

DEFAULT_TOURNAMENT_ID = 23

BROWSER_HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
    "Origin": "https://www.sofascore.com",
    "Referer": "https://www.sofascore.com/",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
}


# ============== OUTGOING RATE LIMITER ==============
class AsyncRateLimiter:
    """Enforces a minimum interval between outgoing requests."""

    def __init__(self, min_interval: float):
        self.min_interval = min_interval
        self._lock = asyncio.Lock()
        self._last_request_time: float = 0

    async def acquire(self) -> None:
        """Wait until ``min_interval`` has passed since the previous request."""
        if self.min_interval <= 0:
            return
        async with self._lock:
            loop = asyncio.get_running_loop()
            elapsed = loop.time() - self._last_request_time
            if elapsed < self.min_interval:
                wait_time = self.min_interval - elapsed
                logger.debug(f"Throttling SofaScore request, waiting {wait_time:.2f}s")
                await asyncio.sleep(wait_time)
            self._last_request_time = loop.time()


# ============== PAYLOAD MODELS ==============
class SofaScoreTeam(BaseModel):
    """Team as embedded in an event."""

    id: int | None = None
    name: str | None = None
    logo: str | None = None


class SofaScoreScore(BaseModel):
    current: int | None = None
    display: int | None = None

    @property
    def goals(self) -> int | None:
        return self.current if self.current is not None else self.display


class SofaScoreStatus(BaseModel):
    code: int | None = None
    type: str | None = None  # "finished", "notstarted", "inprogress"
    description: str | None = None  # "Ended", "Not started"


class SofaScoreUniqueTournament(BaseModel):
    id: int | None = None
    name: str | None = None


class SofaScoreTournament(BaseModel):
    uniqueTournament: SofaScoreUniqueTournament | None = None


class SofaScoreEvent(BaseModel):
    """The ``event`` object of ``/event/{id}``."""

    id: int
    homeTeam: SofaScoreTeam | None = None
    awayTeam: SofaScoreTeam | None = None
    homeScore: SofaScoreScore | None = None
    awayScore: SofaScoreScore | None = None
    status: SofaScoreStatus | None = None
    startTimestamp: int | None = None
    tournament: SofaScoreTournament | None = None

    @property
    def home_goals(self) -> int | None:
        return self.homeScore.goals if self.homeScore else None

    @property
    def away_goals(self) -> int | None:
        return self.awayScore.goals if self.awayScore else None

    @property
    def is_finished(self) -> bool:
        """Finished with both scores known."""
        return (
            self.status is not None
            and self.status.code == STATUS_FINISHED
            and self.home_goals is not None
            and self.away_goals is not None
        )

    @property
    def league(self) -> SofaScoreUniqueTournament | None:
        return self.tournament.uniqueTournament if self.tournament else None

    def fixture_values(self) -> dict[str, Any]:
        """Column values for the local fixture snapshot."""
        home = self.homeTeam or SofaScoreTeam()
        away = self.awayTeam or SofaScoreTeam()
        league = self.league or SofaScoreUniqueTournament()
        status = self.status or SofaScoreStatus()

        if self.startTimestamp:
            starting_at = datetime.fromtimestamp(self.startTimestamp, tz=timezone.utc)
        else:
            starting_at = datetime.now(timezone.utc) + timedelta(days=1)

        return {
            "name": f"{home.name or 'Home'} vs {away.name or 'Away'}",
            "home_team_id": home.id,
            "home_team_name": home.name,
            "home_team_logo": team_logo_url(home),
            "away_team_id": away.id,
            "away_team_name": away.name,
            "away_team_logo": team_logo_url(away),
            "starting_at": starting_at.replace(tzinfo=None),
            "state_id": status.code,
            "state_name": status.description or status.type,
            "league_id": league.id,
            "league_name": league.name,
            "home_score": self.home_goals,
            "away_score": self.away_goals,
        }


def team_logo_url(team: SofaScoreTeam) -> str | None:
    """Logo from the payload, else the image endpoint for the team id."""
    if team.logo:
        return team.logo
    if team.id is not None:
        return f"{settings.sofascore_image_base_url}/team/{team.id}/image"
    return None


def normalize_endpoint(endpoint: str) -> str:
    """Strip an ``/api/v1`` prefix and ensure a leading slash."""
    endpoint = endpoint.strip()
    if endpoint.startswith("/api/v1/") or endpoint == "/api/v1":
        endpoint = endpoint[len("/api/v1") :]
    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint
    return endpoint


class SofaScoreClient:
    """Client for www.sofascore.com/api/v1."""

    def __init__(
        self,
        base_url: str | None = None,
        rate_limiter: AsyncRateLimiter | None = None,
    ):
        self.base_url = (base_url or settings.sofascore_base_url).rstrip("/")
        self.rate_limiter = rate_limiter or AsyncRateLimiter(settings.sofascore_min_interval)

    async def fetch(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises:
            SofaScoreAPIError: on network failure, non-200 status or invalid JSON.
                ``details["status"]`` carries the upstream status when there is one.
        """
        path = normalize_endpoint(endpoint)
        url = f"{self.base_url}{path}"

        await self.rate_limiter.acquire()

        try:
            response = await get_http_client().get(url, params=params, headers=BROWSER_HEADERS)
        except httpx.HTTPError as e:
            logger.warning(f"SofaScore request failed for {path}: {e}")
            raise SofaScoreAPIError(
                "Failed to reach SofaScore", details={"endpoint": path}
            ) from e

        if response.status_code != 200:
            body = response.text[:500]
            logger.warning(f"SofaScore API error {response.status_code} for {path}: {body}")
            raise SofaScoreAPIError(
                f"SofaScore API error: {response.status_code}",
                details={"status": response.status_code, "endpoint": path, "body": body},
            )

        try:
            return response.json()
        except ValueError as e:
            raise SofaScoreAPIError(
                "Invalid JSON from SofaScore", details={"endpoint": path}
            ) from e

    async def get_event(self, event_id: int) -> SofaScoreEvent:
        data = await self.fetch(f"/event/{event_id}")
        event = data.get("event") if isinstance(data, dict) else None
        if not isinstance(event, dict):
            raise SofaScoreAPIError("Event payload missing", details={"event_id": event_id})
        return SofaScoreEvent(**event)

    async def get_seasons(self, tournament_id: int = DEFAULT_TOURNAMENT_ID) -> list[dict[str, Any]]:
        """Seasons of a unique tournament, newest first. Cached."""
        cache_key = generate_cache_key("seasons", tournament_id, prefix="sofascore")
        cached = await cache_get_json(cache_key)
        if cached is not None:
            return cached  # type: ignore[no-any-return]

        data = await self.fetch(f"/unique-tournament/{tournament_id}/seasons")
        seasons: list[dict[str, Any]] = data.get("seasons") or []
        await cache_set_json(cache_key, seasons, settings.cache_ttl_reference)
        return seasons

    async def get_standings(self, tournament_id: int, season_id: int) -> list[dict[str, Any]]:
        data = await self.fetch(
            f"/unique-tournament/{tournament_id}/season/{season_id}/standings/total"
        )
        return data.get("standings") or []  # type: ignore[no-any-return]

    async def get_team_statistics(self, team_id: int) -> dict[str, Any]:
        result: dict[str, Any] = await self.fetch(f"/team/{team_id}/statistics")
        return result

    async def get_player_transfers(self, player_id: int) -> dict[str, Any]:
        result: dict[str, Any] = await self.fetch(f"/player/{player_id}/transfers")
        return result


def scheduled_events_url(day: str) -> str:
    """Public URL listing a day's football events (``YYYY-MM-DD``)."""
    return f"{settings.sofascore_base_url}/sport/football/scheduled-events/{day}"


_client: SofaScoreClient | None = None


def get_sofascore_client() -> SofaScoreClient:
    """Get the shared SofaScore client (one rate limiter per process)."""
    global _client
    if _client is None:
        _client = SofaScoreClient()
    return _client
