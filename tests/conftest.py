"""
Pytest configuration for chalet booking tests
"""
import os
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

# Settings are read at import time: isolate the database and disable rate limits
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

# Ensure chalet is importable
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def pricing_config():
    from chalet.domain.pricing import PricingConfig

    return PricingConfig(
        base_price=Decimal("400"),
        base_guests=2,
        extra_person_fee=Decimal("50"),
        max_guests=8,
        max_pets=5,
    )


@pytest.fixture
async def engine():
    """Fresh in-memory database per test"""
    from chalet.database import init_db, make_engine

    engine = make_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    from chalet.database import make_session_factory

    return make_session_factory(engine)


@pytest.fixture
def reservation_service(session_factory):
    from chalet.services.reservation_service import ReservationService

    return ReservationService(session_factory)


@pytest.fixture
def future_monday():
    """A Monday at least two weeks from today"""
    today = date.today()
    return today + timedelta(days=(7 - today.weekday()) % 7 + 14)


@pytest.fixture
def sample_reservation_data():
    """Sample data for reservation creation (Mon 2 - Thu 5 March 2026)"""
    return {
        "user_id": "user-1",
        "user_name": "Test Guest",
        "check_in": date(2026, 3, 2),
        "check_out": date(2026, 3, 5),
        "guests": 2,
        "pets": 0,
        "total_price": Decimal("1200"),
        "payment_method": "PIX",
    }


@pytest.fixture
def client():
    """API client on a fresh in-memory database (created on startup, dropped on shutdown)"""
    from fastapi.testclient import TestClient

    from chalet.database import Base
    from chalet.database import engine as app_engine
    from chalet.main import app

    async def reset_db():
        async with app_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    with TestClient(app) as test_client:
        test_client.portal.call(reset_db)
        yield test_client
