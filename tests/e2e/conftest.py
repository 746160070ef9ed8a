"""
Fixtures for tests against a live job queue API.

Run with:
    JOB_QUEUE_URL=https://queue.keboola.com JOB_QUEUE_TOKEN=... pytest tests/e2e -m e2e
"""

import os

import pytest

from job_queue_client import Client


@pytest.fixture(scope="session")
def queue_url() -> str:
    url = os.environ.get("JOB_QUEUE_URL")
    if not url:
        pytest.skip("JOB_QUEUE_URL not set")
    return url


@pytest.fixture(scope="session")
def storage_token() -> str:
    token = os.environ.get("JOB_QUEUE_TOKEN")
    if not token:
        pytest.skip("JOB_QUEUE_TOKEN not set")
    return token


@pytest.fixture
def client(queue_url: str, storage_token: str):
    """Client for the live API, closed after the test."""
    with Client(queue_url, storage_token) as client:
        yield client
