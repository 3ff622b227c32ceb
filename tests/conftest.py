"""Pytest configuration and fixtures for API integration tests."""

import asyncio
import os
import tempfile
from collections.abc import Coroutine, Generator
from datetime import UTC, datetime
from typing import Any, TypeVar
from unittest.mock import AsyncMock, MagicMock, patch

# Settings are read at import time, so the environment must be ready first
_DB_DIR = tempfile.mkdtemp(prefix="scoreline-tests-")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SOFASCORE_MIN_INTERVAL"] = "0"
os.environ["REDIS_URL"] = "redis://127.0.0.1:1"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SPORTMONKS_API_TOKEN"] = "test-token"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from scoreline.api.main import app  # noqa: E402
from scoreline.auth.dependencies import require_auth  # noqa: E402
from scoreline.data.sources.sofascore import SofaScoreEvent  # noqa: E402
from scoreline.db.database import drop_db, init_db  # noqa: E402

T = TypeVar("T")

API = "/api/v1"

# Session payload for an account id that does not exist
MOCK_GHOST_USER: dict[str, Any] = {
    "sub": "999999",
    "email": "ghost@example.com",
    "iat": int(datetime.now(UTC).timestamp()),
    "exp": int(datetime.now(UTC).timestamp()) + 3600,
}


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine on a private loop, leaving any current loop untouched."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture(autouse=True)
def database() -> Generator[None, None, None]:
    """Fresh schema for every test, with cheap bcrypt hashes."""
    run_async(init_db())
    with patch("scoreline.auth.session.BCRYPT_ROUNDS", 4):
        yield
    run_async(drop_db())


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client without any auth override."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_ghost() -> Generator[TestClient, None, None]:
    """Test client whose session points at a missing account."""
    app.dependency_overrides[require_auth] = lambda: MOCK_GHOST_USER
    yield TestClient(app)
    app.dependency_overrides.clear()


def _register(
    client: TestClient,
    email: str = "player@example.com",
    nickname: str = "player_one",
    password: str = "correct-horse",
) -> dict[str, Any]:
    """Register through the API and return ``{id, token, headers, user}``."""
    response = client.post(
        f"{API}/auth/register",
        json={"email": email, "nickname": nickname, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "id": data["user"]["id"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
        "user": data["user"],
    }


@pytest.fixture
def player(client: TestClient) -> dict[str, Any]:
    """A registered account holding the starting balance."""
    return _register(client)


def _top_up(client: TestClient, headers: dict[str, str], amount: int) -> int:
    response = client.post(f"{API}/user/coins", json={"amount": amount}, headers=headers)
    assert response.status_code == 200, response.text
    return int(response.json()["coins"])


def _make_event(
    event_id: int,
    home_goals: int | None = None,
    away_goals: int | None = None,
    status_code: int = 0,
) -> SofaScoreEvent:
    """SofaScore event; ``status_code`` 100 means finished."""
    payload: dict[str, Any] = {
        "id": event_id,
        "homeTeam": {"id": 17, "name": "Manchester City"},
        "awayTeam": {"id": 42, "name": "Arsenal"},
        "status": {
            "code": status_code,
            "type": "finished" if status_code == 100 else "notstarted",
            "description": "Ended" if status_code == 100 else "Not started",
        },
        "startTimestamp": 1760000000,
        "tournament": {"uniqueTournament": {"id": 17, "name": "Premier League"}},
    }
    if home_goals is not None:
        payload["homeScore"] = {"current": home_goals, "display": home_goals}
    if away_goals is not None:
        payload["awayScore"] = {"current": away_goals, "display": away_goals}
    return SofaScoreEvent(**payload)


def _mock_sofascore(**methods: Any) -> MagicMock:
    """SofaScore client double whose named methods are AsyncMocks."""
    client = MagicMock()
    for name, value in methods.items():
        if isinstance(value, BaseException) or (
            isinstance(value, type) and issubclass(value, BaseException)
        ):
            setattr(client, name, AsyncMock(side_effect=value))
        else:
            setattr(client, name, AsyncMock(return_value=value))
    return client


@pytest.fixture
def upcoming_sofascore() -> Generator[MagicMock, None, None]:
    """Wager creation sees a not-yet-started match."""
    mock = _mock_sofascore(get_event=_make_event(12345))
    with patch(
        "scoreline.db.services.prediction_service.get_sofascore_client", return_value=mock
    ):
        yield mock


@pytest.fixture
def register_account() -> Any:
    """Callable registering an extra account: ``register_account(client, email, nickname)``."""
    return _register


@pytest.fixture
def top_up() -> Any:
    """Callable adding coins: ``top_up(client, headers, amount) -> balance``."""
    return _top_up


@pytest.fixture
def make_event() -> Any:
    """Callable building a ``SofaScoreEvent``."""
    return _make_event


@pytest.fixture
def mock_sofascore() -> Any:
    """Callable building a SofaScore client double."""
    return _mock_sofascore
