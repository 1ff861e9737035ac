"""Unit tests for configuration, structured logging and metrics"""

import json
import logging
import pytest
from prometheus_client import REGISTRY
from bike_billing.config import Settings
from bike_billing.domain.models import Charge, ChargeStatus
from bike_billing.infrastructure.observability.logging import log_charge_outcome, log_notification, setup_logging
from bike_billing.infrastructure.observability.metrics import record_authorization
from tests.conftest import NOW


@pytest.fixture
def json_logging():
    """Install the JSON handler and restore the root logger afterwards"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield setup_logging
    root.handlers[:] = handlers
    root.setLevel(level)


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.overdue_threshold_hours == 12
    assert settings.notification_destination_template.format(rider_id=9) == "ciclista-9@bicicletario.local"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("OVERDUE_THRESHOLD_HOURS", "24")
    monkeypatch.setenv("MAX_CHARGE_AMOUNT", "250.5")

    settings = Settings(_env_file=None)

    assert settings.overdue_threshold_hours == 24
    assert settings.max_charge_amount == 250.5


def test_log_notification_is_json(json_logging, capsys):
    json_logging("INFO")
    charge = Charge(id=8, rider_id=2, amount=10.0, card_number="", requested_at=NOW)

    log_notification(charge, "ciclista-2@bicicletario.local")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "Overdue notification sent"
    assert record["level"] == "INFO"
    assert record["charge_id"] == 8
    assert record["destination"] == "ciclista-2@bicicletario.local"
    assert "timestamp" in record


def test_log_charge_outcome_denied_is_warning(json_logging, capsys):
    json_logging("INFO")
    charge = Charge(id=3, rider_id=2, amount=10.0, card_number="", requested_at=NOW)

    log_charge_outcome(charge, "denied", "missing card")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["level"] == "WARNING"
    assert record["reason"] == "missing card"
    assert record["status"] == ChargeStatus.PENDING.label


def test_record_authorization_counts_outcomes():
    before = REGISTRY.get_sample_value("bike_billing_authorizations_total", {"outcome": "refused"}) or 0.0

    record_authorization(False)

    after = REGISTRY.get_sample_value("bike_billing_authorizations_total", {"outcome": "refused"})
    assert after == before + 1
