"""Retry decisions and backoff for API requests.

A request is retried when the server answered with a 5xx status or the
connection broke mid-flight, until the retry budget is spent. Client errors
(4xx), timeouts and refused connections are returned to the caller at once.

Usage:
    policy = RetryPolicy(max_retries=3)
    if policy.should_retry(attempt, request, response=response):
        time.sleep(policy.backoff_delay(attempt))
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from job_queue_client.transport import TransportFailure, classify_transport_error

DEFAULT_MAX_RETRIES = 3


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behavior."""

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay_seconds: float = 1.0
    exponential_base: float = 2.0

    def should_retry(
        self,
        attempts: int,
        request: httpx.Request,
        response: Optional[httpx.Response] = None,
        error: Optional[BaseException] = None,
    ) -> bool:
        """Decide whether a failed attempt gets another try.

        Args:
            attempts: Retries already made for this request (0 on first failure)
            request: The request that failed
            response: Response received, if the server answered
            error: Exception raised by the transport, if any

        Returns:
            True if the request should be sent again
        """
        if attempts >= self.max_retries:
            return False
        if response is not None and response.status_code >= 500:
            return True
        if error is not None:
            code = _error_code(error)
            if code is not None and code >= 500:
                return True
            if (
                isinstance(error, httpx.TransportError)
                and classify_transport_error(error) == TransportFailure.CONNECTION_RESET
            ):
                return True
        return False

    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds before retry number ``attempt`` (0-indexed).

        Exponential backoff: base_delay * (exponential_base ^ attempt)
        """
        return self.base_delay_seconds * (self.exponential_base**attempt)


def _error_code(error: BaseException) -> Optional[int]:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    code = getattr(error, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None
