"""Client for the job queue HTTP API.

Every public call goes through ``Client._send_request``, which sends the
request with the fixed headers, retries transient failures and turns the
outcome into decoded JSON or a ``ClientError``:

- 2xx/3xx: body decoded as JSON (an empty body decodes to ``{}``)
- 4xx/5xx after retries: ``ResponseError`` carrying status and parsed body
- transport failure after retries: ``ClientError`` chained to the cause

Usage:
    with Client("https://queue.keboola.com", token) as client:
        job = client.create_job(JobData("keboola.ex-db-snowflake", "123"))
        job = client.wait_for_job_completion(job.id)
"""

import json
import time
from typing import Any, Optional

import httpx
import structlog

from job_queue_client.config import (
    DEFAULT_BACKOFF_MAX_TRIES,
    ClientConfig,
    Settings,
    get_settings,
)
from job_queue_client.dto import Job
from job_queue_client.exceptions import ClientError, ResponseError
from job_queue_client.job_data import JobData
from job_queue_client.list_jobs_options import ListJobsOptions
from job_queue_client.polling import wait_for_job_completion
from job_queue_client.retry import RetryPolicy
from job_queue_client.transport import build_http_client

ERROR_BODY_SUMMARY_LENGTH = 120


class Client:
    """Synchronous job queue API client.

    Holds only immutable configuration and a thread-safe ``httpx.Client``,
    so one instance can be shared between threads.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        backoff_max_tries: int = DEFAULT_BACKOFF_MAX_TRIES,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[Any] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Public URL of the job queue API
            token: Storage API token
            backoff_max_tries: Retries per request, 0-100 (default 3)
            user_agent: User-Agent header (default "Job Queue Python Client")
            transport: Optional httpx transport override
            logger: Optional logger for request and retry events

        Raises:
            ClientError: If any option is invalid; lists every violation
        """
        self.config = ClientConfig.create(
            base_url=base_url,
            token=token,
            backoff_max_tries=backoff_max_tries,
            user_agent=user_agent,
            transport=transport,
            logger=logger,
        )
        self._logger = self.config.logger or structlog.get_logger(__name__)
        self._retry_policy = RetryPolicy(max_retries=self.config.backoff_max_tries)
        self._http = build_http_client(self.config, self._logger)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Client":
        return cls(
            config.base_url,
            config.token,
            backoff_max_tries=config.backoff_max_tries,
            user_agent=config.user_agent,
            transport=config.transport,
            logger=config.logger,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Client":
        """Build a client from ``JOB_QUEUE_*`` environment settings.

        Raises:
            ClientError: If the settings carry no token or an invalid value
        """
        settings = settings or get_settings()
        return cls(
            settings.url,
            settings.token,
            backoff_max_tries=settings.backoff_max_tries,
            user_agent=settings.user_agent,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # =========================================================================
    # Public API
    # =========================================================================

    def create_job(self, job_data: JobData) -> Job:
        """Submit a new job.

        Raises:
            ClientError: If the job data cannot be serialized (checked before
                anything is sent) or the request fails
        """
        try:
            content = json.dumps(job_data.to_wire_format(), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ClientError(f"Invalid job data: {e}") from e

        result = self._send_request("POST", "jobs", content=content)
        return Job.from_api_response(result)

    def get_job(self, job_id: str) -> Job:
        result = self._send_request("GET", f"jobs/{job_id}")
        return Job.from_api_response(result)

    def list_jobs(self, options: Optional[ListJobsOptions] = None) -> list[Job]:
        """List jobs matching the given filters (first 100 jobs by default)."""
        options = options or ListJobsOptions()
        params = {
            f"{name}[]" if isinstance(value, list) else name: value
            for name, value in options.query_parameters().items()
        }
        result = self._send_request("GET", "jobs", params=params)
        if not isinstance(result, list):
            raise ClientError(
                f"Unexpected job list response: expected a JSON array, "
                f"got {type(result).__name__}"
            )
        return [Job.from_api_response(item) for item in result]

    def terminate_job(self, job_id: str) -> Job:
        """Ask the queue to terminate a job.

        Returns right away with ``desired_status`` set to terminating; the
        job itself stops asynchronously.
        """
        result = self._send_request("POST", f"jobs/{job_id}/kill")
        return Job.from_api_response(result)

    def get_jobs_duration_sum(self) -> int:
        """Total duration in seconds of all jobs in the token's project."""
        result = self._send_request("GET", "stats/project")
        try:
            duration_sum = result["jobs"]["durationSum"]
        except (KeyError, TypeError) as e:
            raise ClientError(f"Failed to parse project stats: {e!r}") from e
        if isinstance(duration_sum, bool) or not isinstance(duration_sum, int):
            raise ClientError(
                f"Failed to parse project stats: durationSum is not an integer "
                f"({duration_sum!r})"
            )
        return duration_sum

    def get_job_lineage(self, job_id: str) -> Any:
        """OpenLineage events for a job, returned as decoded JSON."""
        return self._send_request("GET", f"job/{job_id}/open-api-lineage")

    def wait_for_job_completion(self, job_id: str) -> Job:
        """Poll until the job is finished. Blocks with no time limit."""
        return wait_for_job_completion(self, job_id, log=self._logger)

    # =========================================================================
    # Request pipeline
    # =========================================================================

    def _send_request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        content: Optional[str] = None,
    ) -> Any:
        request = self._http.build_request(method, path, params=params, content=content)

        attempt = 0
        while True:
            response: Optional[httpx.Response] = None
            error: Optional[httpx.HTTPError] = None
            try:
                response = self._http.send(request)
            except httpx.HTTPError as e:
                error = e

            if response is not None and not response.is_error:
                return self._decode_body(response)

            if not self._retry_policy.should_retry(attempt, request, response, error):
                break

            delay = self._retry_policy.backoff_delay(attempt)
            self._logger.warning(
                "job_queue_retry",
                method=method,
                path=path,
                attempt=attempt + 1,
                max_retries=self._retry_policy.max_retries,
                delay_seconds=delay,
                status=response.status_code if response is not None else None,
                error=str(error) if error is not None else None,
            )
            time.sleep(delay)
            attempt += 1

        if 0 < self._retry_policy.max_retries <= attempt:
            self._logger.warning(
                "job_queue_retries_exhausted",
                method=method,
                path=path,
                attempts=attempt + 1,
                status=response.status_code if response is not None else None,
                error=str(error) if error is not None else None,
            )

        if response is not None:
            raise self._response_error(request, response)
        raise ClientError(str(error) or type(error).__name__) from error

    def _decode_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return json.loads(response.content)
        except ValueError as e:
            raise ClientError(f"Unable to parse response body into JSON: {e}", 0) from e

    def _response_error(
        self, request: httpx.Request, response: httpx.Response
    ) -> ResponseError:
        kind = "Client" if response.status_code < 500 else "Server"
        message = (
            f"{kind} error: `{request.method} {request.url}` resulted in a "
            f"`{response.status_code} {response.reason_phrase}` response"
        )

        body = response.text
        if body:
            summary = body[:ERROR_BODY_SUMMARY_LENGTH]
            if len(body) > ERROR_BODY_SUMMARY_LENGTH:
                summary += " (truncated...)"
            message += f":\n{summary}"

        try:
            response_data = json.loads(response.content)
        except ValueError:
            response_data = None
        if not isinstance(response_data, dict):
            response_data = None

        return ResponseError(message, response.status_code, response_data)
