"""Database services layer.

High-level operations used by the API routes. Each service method opens
its own unit of work.
"""

from scoreline.db.services.account_service import AccountService
from scoreline.db.services.fixture_service import FixtureService
from scoreline.db.services.prediction_service import PredictionService
from scoreline.db.services.settlement_service import SettlementService
from scoreline.db.services.shop_service import ShopService

__all__ = [
    "AccountService",
    "FixtureService",
    "PredictionService",
    "SettlementService",
    "ShopService",
]
