"""Custom exceptions for the application."""

from typing import Any


class ScorelineError(Exception):
    """Base exception for the application."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ScorelineError):
    """Data validation error."""

    pass


class AuthenticationError(ScorelineError):
    """Invalid credentials or session."""

    status_code = 401


class NotFoundError(ScorelineError):
    """Requested resource does not exist."""

    status_code = 404


class InsufficientCoinsError(ScorelineError):
    """Balance is lower than the amount being spent."""

    pass


class DuplicatePredictionError(ScorelineError):
    """Account already holds a prediction for this target."""

    pass


class AlreadyOwnedError(ScorelineError):
    """Shop item or badge is already in the account's inventory."""

    pass


class ItemNotOwnedError(ScorelineError):
    """Equip attempted with an item the account does not own."""

    pass


class InvalidCategoryError(ScorelineError):
    """Unknown equip slot, or item does not fit the slot."""

    pass


class ConfigurationError(ScorelineError):
    """Required setting is missing."""

    status_code = 500


class DataSourceError(ScorelineError):
    """Error fetching data from external source."""

    status_code = 500

    @property
    def upstream_status(self) -> int | None:
        status = self.details.get("status")
        return status if isinstance(status, int) else None


class SofaScoreAPIError(DataSourceError):
    """Error from the SofaScore API."""

    pass


class SportMonksAPIError(DataSourceError):
    """Error from the SportMonks API."""

    pass
