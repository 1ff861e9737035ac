"""In-memory data access layer for charges"""

import threading
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from bike_billing.domain.exceptions import DuplicateChargeError, InvalidTransitionError
from bike_billing.domain.models import Charge, ChargeStatus, can_transition
from bike_billing.utils.date_utils import hours_before


class ChargeStore:
    """
    Owns every Charge for the lifetime of the process.

    Charges are kept in insertion order and are never removed; callers change
    them only through `transition`, which updates status and finalized_at
    together under the store lock.
    """

    def __init__(self, charges: Iterable[Charge] = ()):
        self._lock = threading.RLock()
        self._charges: Dict[int, Charge] = {}
        self._last_id = 0
        self.replace_all(charges)

    def get(self, charge_id: int) -> Optional[Charge]:
        """Fetch a charge by id, None when absent"""
        with self._lock:
            return self._charges.get(charge_id)

    def all(self) -> List[Charge]:
        with self._lock:
            return list(self._charges.values())

    def add(self, charge: Charge) -> Charge:
        with self._lock:
            if charge.id in self._charges:
                raise DuplicateChargeError(f"Charge {charge.id} already exists")
            self._charges[charge.id] = charge
            self._last_id = max(self._last_id, charge.id)
            return charge

    def replace_all(self, charges: Iterable[Charge]) -> None:
        """Bulk-set the collection, keeping the given order"""
        with self._lock:
            self._charges = {}
            self._last_id = 0
            for charge in charges:
                self.add(charge)

    def next_id(self) -> int:
        with self._lock:
            self._last_id += 1
            return self._last_id

    def list_overdue(self, now: datetime, threshold_hours: float) -> List[Charge]:
        """
        Pending charges requested strictly more than `threshold_hours` before `now`.

        Results follow insertion order, not age.
        """
        cutoff = hours_before(now, threshold_hours)
        with self._lock:
            return [
                charge
                for charge in self._charges.values()
                if charge.status is ChargeStatus.PENDING and charge.requested_at < cutoff
            ]

    def transition(
        self,
        charge: Charge,
        target: ChargeStatus,
        finalized_at: Optional[datetime] = None,
        expected: Optional[ChargeStatus] = None,
    ) -> bool:
        """
        Move a charge to `target`.

        Returns False without touching the charge when `expected` is given and
        the charge is no longer in that status.

        Raises:
            InvalidTransitionError: target is not reachable from the current status
        """
        with self._lock:
            if expected is not None and charge.status is not expected:
                return False
            if not can_transition(charge.status, target):
                raise InvalidTransitionError(
                    f"Charge {charge.id} cannot move from {charge.status.name} to {target.name}"
                )
            if finalized_at is not None and finalized_at < charge.requested_at:
                raise InvalidTransitionError(f"Charge {charge.id} cannot be finalized before it was requested")
            charge.status = target
            if finalized_at is not None:
                charge.finalized_at = finalized_at
            return True
