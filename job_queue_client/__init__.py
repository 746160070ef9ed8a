"""Job Queue Client - Python client for the job queue API

Submit, inspect, list and terminate jobs; responses come back as typed,
validated objects and failures as ``ClientError``/``ResponseError``.
"""

from job_queue_client.client import Client
from job_queue_client.config import ClientConfig, Settings, get_settings
from job_queue_client.dto import (
    Backend,
    Behavior,
    Job,
    Project,
    Token,
    VariableValuesData,
)
from job_queue_client.exceptions import ClientError, ResponseError
from job_queue_client.factory import JobQueueClientFactory
from job_queue_client.job_data import JobData
from job_queue_client.list_jobs_options import ListJobsOptions, ListJobsOptionsBuilder
from job_queue_client.polling import wait_for_job_completion
from job_queue_client.retry import RetryPolicy
from job_queue_client.transport import TransportFailure, classify_transport_error
from job_queue_client.types import (
    DesiredStatus,
    JobMode,
    JobStatus,
    JobType,
    SortOrder,
)

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "Behavior",
    "Client",
    "ClientConfig",
    "ClientError",
    "DesiredStatus",
    "Job",
    "JobData",
    "JobMode",
    "JobQueueClientFactory",
    "JobStatus",
    "JobType",
    "ListJobsOptions",
    "ListJobsOptionsBuilder",
    "Project",
    "ResponseError",
    "RetryPolicy",
    "Settings",
    "SortOrder",
    "Token",
    "TransportFailure",
    "VariableValuesData",
    "classify_transport_error",
    "get_settings",
    "wait_for_job_completion",
]
