"""Email service client with exponential backoff retry logic"""

import time
import httpx
from bike_billing.config import settings
from bike_billing.domain.exceptions import NotificationError
from bike_billing.infrastructure.observability.metrics import notification_failure_counter


class EmailNotifier:
    """Client for sending rider notifications through the email service"""

    def __init__(
        self,
        base_url: str | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url or settings.email_api_base
        self.max_retries = max_retries if max_retries is not None else settings.notification_max_retries
        self.backoff_base = backoff_base if backoff_base is not None else settings.notification_backoff_base
        self.timeout = settings.http_timeout_seconds
        self.transport = transport

    def send_message(self, destination: str, subject: str, body: str) -> None:
        """
        Send an email to a rider with retry logic.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1)
        - Retries on 5xx errors and network failures, 4xx fails immediately
        - Counts every failed attempt

        Raises:
            NotificationError: after the last failed attempt
        """
        payload = {"email": destination, "subject": subject, "message": body}
        attempt = 0
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    response = client.post(f"{self.base_url}/enviarEmail", json=payload)
                    response.raise_for_status()
                    return  # Success

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    notification_failure_counter.inc()

                    client_error = (
                        isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500
                    )
                    if client_error or attempt >= self.max_retries:
                        raise NotificationError(f"Email delivery to {destination} failed: {e}") from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    time.sleep(backoff)
