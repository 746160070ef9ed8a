"""Tests for job completion polling."""

from unittest.mock import MagicMock, call

import pytest

from job_queue_client.dto import Job
from job_queue_client.exceptions import ClientError, ResponseError
from job_queue_client.polling import MAX_WAIT_DELAY_SECONDS, wait_for_job_completion


def _job(job_payload, **changes) -> Job:
    return Job.from_api_response(dict(job_payload, **changes))


class TestWaitForJobCompletion:
    """Test polling until a job is finished."""

    def test_returns_first_finished_snapshot(self, job_payload, sleep_mock):
        client = MagicMock()
        client.get_job.side_effect = [
            _job(job_payload, status="waiting"),
            _job(job_payload, status="processing"),
            _job(job_payload, status="error", isFinished=True),
        ]

        job = wait_for_job_completion(client, "683194249")

        assert job.is_error()
        assert client.get_job.call_args_list == [call("683194249")] * 3
        assert sleep_mock.call_args_list == [call(2), call(4)]

    def test_no_sleep_when_already_finished(self, job_payload, sleep_mock):
        client = MagicMock()
        client.get_job.return_value = _job(job_payload, isFinished=True)

        wait_for_job_completion(client, "683194249")

        assert client.get_job.call_count == 1
        sleep_mock.assert_not_called()

    def test_delay_is_capped(self, job_payload, sleep_mock):
        client = MagicMock()
        client.get_job.side_effect = [_job(job_payload)] * 5 + [
            _job(job_payload, isFinished=True)
        ]

        wait_for_job_completion(client, "683194249")

        assert MAX_WAIT_DELAY_SECONDS == 10
        assert sleep_mock.call_args_list == [
            call(2),
            call(4),
            call(8),
            call(10),
            call(10),
        ]

    def test_custom_max_delay(self, job_payload, sleep_mock):
        client = MagicMock()
        client.get_job.side_effect = [_job(job_payload)] * 2 + [
            _job(job_payload, isFinished=True)
        ]

        wait_for_job_completion(client, "683194249", max_delay_seconds=3)

        assert sleep_mock.call_args_list == [call(2), call(3)]

    @pytest.mark.parametrize(
        "error",
        [ClientError("Failed to parse Job data: boom"), ResponseError("gone", 404)],
    )
    def test_errors_propagate(self, job_payload, sleep_mock, error):
        client = MagicMock()
        client.get_job.side_effect = [_job(job_payload), error]

        with pytest.raises(ClientError) as exc_info:
            wait_for_job_completion(client, "683194249")

        assert exc_info.value is error
        assert client.get_job.call_count == 2

    def test_poll_events_use_given_logger(self, job_payload):
        client = MagicMock()
        client.get_job.side_effect = [
            _job(job_payload, status="processing"),
            _job(job_payload, isFinished=True),
        ]
        log = MagicMock()

        wait_for_job_completion(client, "683194249", log=log)

        log.debug.assert_called_once_with(
            "job_queue_poll",
            job_id="683194249",
            status="processing",
            attempt=1,
            delay_seconds=2,
        )
