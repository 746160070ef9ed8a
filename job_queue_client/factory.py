"""Create clients for many tokens against one API endpoint."""

from typing import Optional

from job_queue_client.client import Client
from job_queue_client.config import DEFAULT_BACKOFF_MAX_TRIES, Settings, get_settings


class JobQueueClientFactory:
    """Holds the endpoint, user agent and retry budget; hands out one client per token."""

    def __init__(
        self,
        public_api_url: str,
        user_agent: str,
        backoff_max_tries: int = DEFAULT_BACKOFF_MAX_TRIES,
    ):
        self.public_api_url = public_api_url
        self.user_agent = user_agent
        self.backoff_max_tries = backoff_max_tries

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "JobQueueClientFactory":
        """Build a factory from ``JOB_QUEUE_*`` environment settings.

        ``JOB_QUEUE_TOKEN`` is not used; tokens are passed per client.
        """
        settings = settings or get_settings()
        return cls(settings.url, settings.user_agent, settings.backoff_max_tries)

    def create_client_from_token(self, token: str) -> Client:
        return Client(
            self.public_api_url,
            token,
            backoff_max_tries=self.backoff_max_tries,
            user_agent=self.user_agent,
        )
