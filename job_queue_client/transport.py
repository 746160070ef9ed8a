"""HTTP transport setup and transport failure classification.

The client talks to the API through a plain ``httpx.Client``. This module
builds that client (base URL, fixed headers, timeouts, response logging) and
maps ``httpx`` exceptions onto a small set of failure categories the retry
policy can reason about without knowing ``httpx`` internals.
"""

from enum import Enum
from typing import Any, Callable

import httpx

from job_queue_client.config import (
    CONNECT_TIMEOUT_SECONDS,
    TIMEOUT_SECONDS,
    ClientConfig,
)

TOKEN_HEADER = "X-StorageApi-Token"

_DNS_ERROR_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)


class TransportFailure(str, Enum):
    """Categories of failures below the HTTP layer.

    - TIMEOUT: connect, read, write or pool timeout
    - CONNECTION_RESET: the connection broke while sending or receiving
    - DNS_FAILURE: the host name could not be resolved
    - OTHER: everything else (refused connections, TLS errors, ...)
    """

    TIMEOUT = "timeout"
    CONNECTION_RESET = "connection_reset"
    DNS_FAILURE = "dns_failure"
    OTHER = "other"


def classify_transport_error(error: BaseException) -> TransportFailure:
    """Map an ``httpx`` transport exception to a ``TransportFailure``."""
    if isinstance(error, httpx.TimeoutException):
        return TransportFailure.TIMEOUT
    if isinstance(error, (httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError)):
        return TransportFailure.CONNECTION_RESET
    if isinstance(error, httpx.ConnectError):
        message = str(error).lower()
        if any(marker in message for marker in _DNS_ERROR_MARKERS):
            return TransportFailure.DNS_FAILURE
    return TransportFailure.OTHER


def default_headers(config: ClientConfig) -> dict[str, str]:
    return {
        "User-Agent": config.user_agent,
        TOKEN_HEADER: config.token,
        "Content-Type": "application/json",
    }


def response_logger(logger: Any) -> Callable[[httpx.Response], None]:
    """Build an ``httpx`` response hook that logs every request/response pair."""

    def log_response(response: httpx.Response) -> None:
        request = response.request
        logger.info(
            "job_queue_response",
            method=request.method,
            host=request.url.host,
            path=request.url.raw_path.decode("ascii"),
            status=response.status_code,
            content_length=response.headers.get("Content-Length"),
            user_agent=request.headers.get("User-Agent"),
        )

    return log_response


def build_http_client(config: ClientConfig, logger: Any) -> httpx.Client:
    """Create the ``httpx.Client`` used for all API calls."""
    base_url = config.base_url
    if not base_url.endswith("/"):
        base_url += "/"

    return httpx.Client(
        base_url=base_url,
        headers=default_headers(config),
        timeout=httpx.Timeout(TIMEOUT_SECONDS, connect=CONNECT_TIMEOUT_SECONDS),
        transport=config.transport,
        event_hooks={"response": [response_logger(logger)]},
    )
