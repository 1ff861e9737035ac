"""Payment authorization adapters: local stand-in and payment network HTTP client"""

import logging
import httpx
from bike_billing.config import settings
from bike_billing.domain.cards import is_well_formed
from bike_billing.infrastructure.observability.metrics import authorization_latency_histogram


class LocalPaymentAuthorizer:
    """
    Stand-in for the payment network.

    Approves any well-formed card number (digits and separating spaces). The
    amount is accepted so the interface matches a real network, but it does
    not gate approval here.
    """

    def authorize(self, amount: float, card_number: str) -> bool:
        return is_well_formed(card_number)


class HttpPaymentAuthorizer:
    """Client for the external payment network authorization API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url or settings.payment_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def authorize(self, amount: float, card_number: str) -> bool:
        """
        Ask the payment network to authorize `amount` on `card_number`.

        Timeouts, HTTP errors and malformed answers all count as a refusal;
        nothing is raised to the caller.
        """
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                with authorization_latency_histogram.time():
                    response = client.post(
                        f"{self.base_url}/authorizations",
                        json={"amount": amount, "card_number": card_number},
                    )
                    response.raise_for_status()
                data = response.json()
                return data["authorized"] is True

            except httpx.TimeoutException:
                logging.warning(f"Payment network timeout after {self.timeout}s")
                return False
            except httpx.HTTPStatusError as e:
                logging.warning(f"Payment network error: {e.response.status_code}")
                return False
            except httpx.RequestError as e:
                logging.warning(f"Payment network unreachable: {e}")
                return False
            except (KeyError, ValueError, TypeError) as e:
                logging.warning(f"Invalid authorization response: {e}")
                return False
