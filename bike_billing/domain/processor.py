"""Charge lifecycle orchestration - payment attempts, overdue scan and rider notification"""

import logging
import queue
from datetime import datetime
from typing import Callable, List, Optional

from bike_billing.config import Settings, settings as default_settings
from bike_billing.domain.cards import validate_card
from bike_billing.domain.exceptions import PaymentNotAuthorizedError
from bike_billing.domain.models import Charge, ChargeStatus, ProcessingReport
from bike_billing.domain.ports import Notifier, PaymentAuthorizer
from bike_billing.infrastructure.observability.logging import log_charge_outcome, log_notification
from bike_billing.infrastructure.observability.metrics import (
    charges_created_counter,
    overdue_notification_counter,
    processing_queue_gauge,
    record_authorization,
    record_charge_execution,
)
from bike_billing.infrastructure.store import ChargeStore
from bike_billing.utils.date_utils import not_before

MESSAGE_TEMPLATE = (
    "Caro(a) Ciclista {rider_id},\n\n"
    "De acordo com nossos registros, identificamos uma cobrança em atraso para a devolução da bicicleta.\n"
    "Data da cobrança: {requested_at}\n"
    "Valor da cobrança: {amount}\n\n"
    "Atenciosamente,\n"
    "Equipe do sistema de aluguel de bicicletas"
)


class ChargeProcessor:
    """
    Drives charges through their lifecycle.

    Charges are read and changed only through the injected ChargeStore. The
    payment authorizer and the notifier are called outside the store lock.
    """

    def __init__(
        self,
        store: ChargeStore,
        authorizer: PaymentAuthorizer,
        notifier: Notifier,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.authorizer = authorizer
        self.notifier = notifier
        self.settings = settings or default_settings
        self.clock = clock
        self._queue: "queue.Queue[Charge]" = queue.Queue()

    def create_charge(
        self,
        rider_id: int,
        amount: float,
        card_number: str,
        requested_at: Optional[datetime] = None,
    ) -> Charge:
        """Open a pending charge for a late return"""
        charge = Charge(
            id=self.store.next_id(),
            rider_id=rider_id,
            amount=amount,
            card_number=card_number,
            requested_at=requested_at or self.clock(),
        )
        self.store.add(charge)
        charges_created_counter.inc()
        return charge

    def get_charge(self, charge_id: int) -> Optional[Charge]:
        return self.store.get(charge_id)

    def attempt_payment(self, amount: float, card_number: str) -> bool:
        """
        Probe the payment network without touching any charge.

        Any refusal, including an adapter failure of any kind, comes back as False.
        """
        try:
            approved = bool(self.authorizer.authorize(amount, card_number))
        except Exception as e:
            logging.warning(f"Authorization probe failed: {e!r}")
            approved = False
        record_authorization(approved)
        return approved

    def execute_charge(self, charge: Charge) -> None:
        """
        Capture a pending charge and move it to awaiting payment.

        The charge the store owns under `charge.id` is the one changed. Charges
        that already left PENDING are left alone, so reprocessing never
        charges twice.

        Raises:
            PaymentNotAuthorizedError: empty or invalid card, amount above the
                policy limit, or refusal by the payment network. The charge is
                not modified.
        """
        self._execute(charge)

    def _execute(self, charge: Charge) -> str:
        """Run one charge and return its outcome: authorized or skipped"""
        charge = self.store.get(charge.id) or charge
        if not charge.is_pending:
            record_charge_execution("skipped")
            return "skipped"

        reason = self._refusal_reason(charge)
        if reason is None and not self.attempt_payment(charge.amount, charge.card_number):
            reason = "refused by payment network"
        if reason is not None:
            record_charge_execution("denied")
            log_charge_outcome(charge, "denied", reason)
            raise PaymentNotAuthorizedError()

        finalized_at = not_before(self.clock(), charge.requested_at)
        moved = self.store.transition(
            charge,
            ChargeStatus.AWAITING_PAYMENT,
            finalized_at=finalized_at,
            expected=ChargeStatus.PENDING,
        )
        outcome = "authorized" if moved else "skipped"
        record_charge_execution(outcome)
        log_charge_outcome(charge, outcome)
        return outcome

    def _refusal_reason(self, charge: Charge) -> Optional[str]:
        if not charge.card_number:
            return "missing card"
        if not validate_card(charge.card_number):
            return "invalid card"
        if not charge.amount <= self.settings.max_charge_amount:
            return "amount above limit"
        return None

    def enqueue(self, charge: Charge) -> None:
        """Append a charge to the FIFO processing queue"""
        self._queue.put(charge)
        processing_queue_gauge.set(self._queue.qsize())

    def pending_in_queue(self) -> int:
        return self._queue.qsize()

    def process_queue(self) -> ProcessingReport:
        """
        Drain the queue in arrival order, executing each charge.

        Denied charges stay pending and are not re-enqueued.
        """
        report = ProcessingReport()
        while True:
            try:
                charge = self._queue.get_nowait()
            except queue.Empty:
                break
            try:
                if self._execute(charge) == "authorized":
                    report.executed.append(charge)
                else:
                    report.skipped.append(charge)
            except PaymentNotAuthorizedError:
                report.denied.append(charge)
            finally:
                self._queue.task_done()
                processing_queue_gauge.set(self._queue.qsize())
        return report

    def list_overdue_charges(self) -> List[Charge]:
        """Pending charges older than the overdue threshold, in insertion order"""
        return self.store.list_overdue(self.clock(), self.settings.overdue_threshold_hours)

    def compose_message(self, charge: Charge) -> str:
        return MESSAGE_TEMPLATE.format(
            rider_id=charge.rider_id,
            requested_at=charge.requested_at,
            amount=charge.amount,
        )

    def destination_for(self, charge: Charge) -> str:
        return self.settings.notification_destination_template.format(rider_id=charge.rider_id)

    def notify(self, charge: Charge) -> None:
        """Send the overdue message for one charge; delivery errors propagate"""
        destination = self.destination_for(charge)
        self.notifier.send_message(destination, self.settings.notification_subject, self.compose_message(charge))
        overdue_notification_counter.inc()
        log_notification(charge, destination)

    def notify_overdue_charges(self) -> List[Charge]:
        """Periodic scan: notify every overdue charge and return them"""
        overdue = self.list_overdue_charges()
        for charge in overdue:
            self.notify(charge)
        return overdue
