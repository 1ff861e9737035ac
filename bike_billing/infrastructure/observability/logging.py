"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from bike_billing.config import settings
from bike_billing.domain.models import Charge


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_charge_outcome(charge: Charge, outcome: str, reason: str | None = None) -> None:
    """Log structured charge execution outcome for analysis"""
    extra = {
        "charge_id": charge.id,
        "rider_id": charge.rider_id,
        "step": "charge_execution",
        "outcome": outcome,
        "status": charge.status.label,
        "amount": charge.amount,
    }
    if reason:
        extra["reason"] = reason
    if outcome == "denied":
        logging.warning("Charge not authorized", extra=extra)
    else:
        logging.info("Charge execution completed", extra=extra)


def log_notification(charge: Charge, destination: str) -> None:
    """Log an overdue notification dispatch"""
    logging.info(
        "Overdue notification sent",
        extra={
            "charge_id": charge.id,
            "rider_id": charge.rider_id,
            "step": "overdue_notification",
            "destination": destination,
        },
    )
