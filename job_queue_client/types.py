"""Job queue type definitions."""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle statuses reported by the queue."""

    CREATED = "created"
    WAITING = "waiting"
    PROCESSING = "processing"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    CANCELLED = "cancelled"
    TERMINATING = "terminating"
    TERMINATED = "terminated"

    @property
    def is_terminal(self) -> bool:
        """Check if this status is terminal (job won't change)."""
        return self in (
            JobStatus.SUCCESS,
            JobStatus.WARNING,
            JobStatus.ERROR,
            JobStatus.CANCELLED,
            JobStatus.TERMINATED,
        )


class DesiredStatus(str, Enum):
    """Status the caller last asked the queue for."""

    PROCESSING = "processing"
    TERMINATING = "terminating"


class JobMode(str, Enum):
    """Run modes accepted on submission."""

    RUN = "run"
    FORCE_RUN = "forceRun"
    DEBUG = "debug"


class JobType(str, Enum):
    """Job types (plain jobs and the container kinds)."""

    STANDARD = "standard"
    ROW_CONTAINER = "container"
    PHASE_CONTAINER = "phaseContainer"
    ORCHESTRATION_CONTAINER = "orchestrationContainer"


class SortOrder(str, Enum):
    """Sort direction for job listings."""

    ASC = "asc"
    DESC = "desc"
