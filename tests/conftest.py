"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import Mock
from bike_billing.config import Settings
from bike_billing.domain.models import Charge
from bike_billing.domain.processor import ChargeProcessor
from bike_billing.infrastructure.clients.payment import LocalPaymentAuthorizer
from bike_billing.infrastructure.store import ChargeStore


NOW = datetime(2024, 5, 17, 10, 30, 15, 123456)
VALID_CARD = "4111 1111 1111 1111"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment"""
    return Settings(
        _env_file=None,
        overdue_threshold_hours=12,
        max_charge_amount=1000.0,
        notification_backoff_base=0.0,
    )


@pytest.fixture
def store() -> ChargeStore:
    return ChargeStore()


@pytest.fixture
def notifier() -> Mock:
    """Notifier double recording send_message calls"""
    return Mock(spec=["send_message"])


@pytest.fixture
def processor(store: ChargeStore, notifier: Mock, test_settings: Settings) -> ChargeProcessor:
    """Processor over an empty store with a frozen clock"""
    return ChargeProcessor(
        store=store,
        authorizer=LocalPaymentAuthorizer(),
        notifier=notifier,
        settings=test_settings,
        clock=lambda: NOW,
    )


@pytest.fixture
def sample_charges() -> list[Charge]:
    """Two pending charges for the same rider"""
    return [
        Charge(
            id=1,
            rider_id=3,
            amount=50.0,
            card_number="1234566789",
            requested_at=NOW,
        ),
        Charge(
            id=2,
            rider_id=3,
            amount=50.0,
            card_number="9877453112",
            requested_at=NOW - timedelta(hours=1),
        ),
    ]
