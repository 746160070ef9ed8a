"""Block until a job reaches a final state."""

import time
from typing import TYPE_CHECKING, Any, Optional

import structlog

from job_queue_client.dto import Job

if TYPE_CHECKING:
    from job_queue_client.client import Client

logger = structlog.get_logger(__name__)

MAX_WAIT_DELAY_SECONDS = 10


def wait_for_job_completion(
    client: "Client",
    job_id: str,
    max_delay_seconds: float = MAX_WAIT_DELAY_SECONDS,
    log: Optional[Any] = None,
) -> Job:
    """Poll a job until the queue reports it finished.

    Sleeps ``min(2 ** attempt, max_delay_seconds)`` between polls. There is
    no attempt limit; errors from ``get_job`` propagate as they are, after
    the retries ``get_job`` already does on its own.

    Args:
        client: Client used for ``get_job``
        job_id: Job to wait for
        max_delay_seconds: Upper bound for a single sleep
        log: Logger for poll events (default: this module's logger)

    Returns:
        The first snapshot with ``is_finished`` set
    """
    log = log or logger
    attempt = 0
    while True:
        job = client.get_job(job_id)
        attempt += 1
        if job.is_finished:
            return job

        delay = min(2**attempt, max_delay_seconds)
        log.debug(
            "job_queue_poll",
            job_id=job_id,
            status=job.status.value,
            attempt=attempt,
            delay_seconds=delay,
        )
        time.sleep(delay)
