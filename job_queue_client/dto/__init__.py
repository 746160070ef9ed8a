"""Typed views over job queue API payloads."""

from job_queue_client.dto.job import Job
from job_queue_client.dto.values import (
    Backend,
    Behavior,
    Project,
    Token,
    VariableValuesData,
)

__all__ = [
    "Backend",
    "Behavior",
    "Job",
    "Project",
    "Token",
    "VariableValuesData",
]
