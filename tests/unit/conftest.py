"""Shared fixtures for client unit tests."""

import copy
from typing import Any, Union
from unittest.mock import patch

import httpx
import pytest

from job_queue_client import Client

BASE_URL = "http://example.com/"
TOKEN = "testToken"

JOB_PAYLOAD: dict[str, Any] = {
    "id": "683194249",
    "runId": "683194249",
    "parentRunId": "",
    "project": {"id": "123"},
    "token": {"id": "456", "description": "my token"},
    "status": "created",
    "desiredStatus": "processing",
    "mode": "run",
    "component": "keboola.ex-db-snowflake",
    "config": "123",
    "configData": {},
    "configRowIds": None,
    "tag": None,
    "createdTime": "2021-03-04T21:59:49+00:00",
    "startTime": None,
    "endTime": None,
    "durationSeconds": 0,
    "result": [],
    "usageData": [],
    "isFinished": False,
    "url": "https://queue.east-us-2.azure.keboola-testing.com/jobs/683194249",
    "branchId": "6",
    "variableValuesId": None,
    "variableValuesData": {"values": []},
    "backend": {"context": "18-transformation"},
    "executor": "dind",
    "metrics": [],
    "behavior": {"onError": None},
    "parallelism": None,
    "type": "standard",
    "orchestrationJobId": None,
    "orchestrationTaskId": None,
    "onlyOrchestrationTaskIds": None,
    "previousJobId": None,
}


@pytest.fixture
def job_payload() -> dict[str, Any]:
    """A valid Job payload as the API returns it (fresh copy per test)."""
    return copy.deepcopy(JOB_PAYLOAD)


@pytest.fixture(autouse=True)
def sleep_mock():
    """Never actually sleep during retry backoff or polling."""
    with patch("job_queue_client.client.time.sleep") as mock_sleep:
        yield mock_sleep


MockReply = Union[httpx.Response, Exception]


@pytest.fixture
def make_client():
    """Build a client whose transport replays canned replies.

    Returns the client and the list of requests it sent, in order.
    Exceptions in the reply list are raised by the transport.
    """
    clients: list[Client] = []

    def _make(replies: list[MockReply], **options: Any):
        queue = list(replies)
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            reply = queue.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply

        client = Client(
            BASE_URL,
            TOKEN,
            transport=httpx.MockTransport(handler),
            **options,
        )
        clients.append(client)
        return client, requests

    yield _make

    for client in clients:
        client.close()
