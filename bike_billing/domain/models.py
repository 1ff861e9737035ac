"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from bike_billing.domain.exceptions import InvalidChargeError


class ChargeStatus(str, Enum):
    """Lifecycle states of a charge"""

    PENDING = "PENDENTE"
    AWAITING_PAYMENT = "AGUARDANDO_PAGAMENTO"
    PAID = "PAGA"
    CANCELLED = "CANCELADA"

    @property
    def label(self) -> str:
        """Human readable name shown to riders and operators"""
        return _STATUS_LABELS[self]


_STATUS_LABELS: Dict[ChargeStatus, str] = {
    ChargeStatus.PENDING: "Pendente",
    ChargeStatus.AWAITING_PAYMENT: "Aguardando pagamento",
    ChargeStatus.PAID: "Paga",
    ChargeStatus.CANCELLED: "Cancelada",
}

# PAID and CANCELLED are terminal
ALLOWED_TRANSITIONS: Dict[ChargeStatus, FrozenSet[ChargeStatus]] = {
    ChargeStatus.PENDING: frozenset({ChargeStatus.AWAITING_PAYMENT, ChargeStatus.CANCELLED}),
    ChargeStatus.AWAITING_PAYMENT: frozenset({ChargeStatus.PAID, ChargeStatus.CANCELLED}),
    ChargeStatus.PAID: frozenset(),
    ChargeStatus.CANCELLED: frozenset(),
}


def can_transition(current: ChargeStatus, target: ChargeStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


@dataclass(eq=False)
class Charge:
    """Money owed by a rider for a late bicycle return"""

    id: int
    rider_id: int
    amount: float
    card_number: str
    requested_at: datetime = field(default_factory=datetime.now)
    status: ChargeStatus = ChargeStatus.PENDING
    finalized_at: Optional[datetime] = None

    def __setattr__(self, name: str, value: Any) -> None:
        # Invariants hold on construction and on every later assignment
        if name == "amount":
            value = self._checked_amount(value)
        elif name == "finalized_at" and value is not None and value < self.requested_at:
            raise InvalidChargeError(f"Charge {self.id} finalized before it was requested")
        elif name == "requested_at" and getattr(self, "finalized_at", None) is not None:
            if self.finalized_at < value:
                raise InvalidChargeError(f"Charge {self.id} finalized before it was requested")
        super().__setattr__(name, value)

    def _checked_amount(self, value: Any) -> float:
        try:
            amount = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidChargeError(f"Charge {self.id} has invalid amount {value!r}") from e
        if not math.isfinite(amount) or amount < 0:
            raise InvalidChargeError(f"Charge {self.id} has invalid amount {amount}")
        return amount

    @property
    def is_pending(self) -> bool:
        return self.status is ChargeStatus.PENDING


@dataclass
class ProcessingReport:
    """Outcome of draining the processing queue once"""

    executed: List[Charge] = field(default_factory=list)
    denied: List[Charge] = field(default_factory=list)
    skipped: List[Charge] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.executed) + len(self.denied) + len(self.skipped)
