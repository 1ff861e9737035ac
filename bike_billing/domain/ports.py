"""Boundaries to the payment network and the rider messaging channel"""

from typing import Protocol


class PaymentAuthorizer(Protocol):
    """Decides whether an amount can be captured against a card"""

    def authorize(self, amount: float, card_number: str) -> bool:
        ...


class Notifier(Protocol):
    """Delivers a message to a rider; errors propagate to the caller"""

    def send_message(self, destination: str, subject: str, body: str) -> None:
        ...
