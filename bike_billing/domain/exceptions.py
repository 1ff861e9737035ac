"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PaymentNotAuthorizedError(DomainException):
    """Charge could not be captured against the rider's card"""

    def __init__(self, message: str = "Pagamento não autorizado"):
        super().__init__(message)


class InvalidChargeError(DomainException):
    """Charge data violates an entity invariant"""

    pass


class InvalidTransitionError(DomainException):
    """Requested status change is not allowed from the current status"""

    pass


class DuplicateChargeError(DomainException):
    """A charge with the same id is already stored"""

    pass


class NotificationError(DomainException):
    """Messaging service rejected the notification or is unavailable"""

    pass
