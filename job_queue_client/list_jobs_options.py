"""Filter, sort and pagination options for listing jobs.

Options are collected on a ``ListJobsOptionsBuilder`` and frozen into a
``ListJobsOptions`` that renders the query parameters of ``GET /jobs``:

    options = (
        ListJobsOptionsBuilder()
        .set_components(["keboola.ex-db-snowflake"])
        .set_statuses([JobStatus.PROCESSING])
        .set_sort_by("id")
        .set_sort_order("desc")
        .build()
    )
    jobs = client.list_jobs(options)
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

from job_queue_client.exceptions import ClientError
from job_queue_client.types import JobStatus, JobType, SortOrder

DEFAULT_LIMIT = 100

# (attribute, query parameter) pairs in emission order
_LIST_PARAMS = (
    ("ids", "id"),
    ("run_ids", "runId"),
    ("branch_ids", "branchId"),
    ("token_ids", "tokenId"),
    ("token_descriptions", "tokenDescription"),
    ("components", "component"),
    ("config_ids", "configId"),
    ("config_row_ids", "configRowIds"),
    ("modes", "mode"),
)
_SCALAR_PARAMS = (
    ("duration_seconds_from", "durationSecondsFrom"),
    ("duration_seconds_to", "durationSecondsTo"),
    ("offset", "offset"),
    ("limit", "limit"),
    ("sort_by", "sortBy"),
    ("sort_order", "sortOrder"),
)
_TIMESTAMP_PARAMS = (
    ("start_time_from", "startTimeFrom"),
    ("start_time_to", "startTimeTo"),
    ("created_time_from", "createdTimeFrom"),
    ("created_time_to", "createdTimeTo"),
    ("end_time_from", "endTimeFrom"),
    ("end_time_to", "endTimeTo"),
)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec="seconds")


@dataclass(frozen=True)
class ListJobsOptions:
    """Finalized listing criteria."""

    ids: tuple[str, ...] = ()
    run_ids: tuple[str, ...] = ()
    branch_ids: tuple[str, ...] = ()
    token_ids: tuple[str, ...] = ()
    token_descriptions: tuple[str, ...] = ()
    components: tuple[str, ...] = ()
    config_ids: tuple[str, ...] = ()
    config_row_ids: tuple[str, ...] = ()
    modes: tuple[str, ...] = ()
    statuses: tuple[JobStatus, ...] = ()
    start_time_from: Optional[datetime] = None
    start_time_to: Optional[datetime] = None
    created_time_from: Optional[datetime] = None
    created_time_to: Optional[datetime] = None
    end_time_from: Optional[datetime] = None
    end_time_to: Optional[datetime] = None
    duration_seconds_from: Optional[int] = None
    duration_seconds_to: Optional[int] = None
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    sort_by: Optional[str] = None
    sort_order: Optional[SortOrder] = None
    parent_run_id: Optional[str] = None
    type: Optional[JobType] = None

    def query_parameters(self) -> dict[str, Any]:
        """Render the options as an ordered name -> value(s) mapping.

        Lists are emitted only when non-empty and scalars only when truthy,
        so zero offsets and durations are left out. ``parent_run_id`` is the
        exception: an empty string is a real filter and is sent as-is.
        """
        params: dict[str, Any] = {}

        for attr, name in _LIST_PARAMS:
            values = getattr(self, attr)
            if values:
                params[name] = list(values)

        for attr, name in _SCALAR_PARAMS:
            value = getattr(self, attr)
            if value:
                params[name] = value.value if isinstance(value, SortOrder) else value

        if self.type is not None:
            params["type"] = self.type.value

        if self.statuses:
            params["status"] = [status.value for status in self.statuses]

        if self.parent_run_id is not None:
            params["parentRunId"] = self.parent_run_id

        for attr, name in _TIMESTAMP_PARAMS:
            value = getattr(self, attr)
            if value is not None:
                params[name] = _format_timestamp(value)

        return params


class ListJobsOptionsBuilder:
    """Accumulates listing criteria; every setter returns the builder."""

    def __init__(self, options: Optional[ListJobsOptions] = None):
        self._options = options or ListJobsOptions()

    def _set(self, **changes: Any) -> "ListJobsOptionsBuilder":
        self._options = replace(self._options, **changes)
        return self

    def set_ids(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(ids=tuple(values))

    def set_run_ids(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(run_ids=tuple(values))

    def set_branch_ids(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(branch_ids=tuple(values))

    def set_token_ids(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(token_ids=tuple(values))

    def set_token_descriptions(
        self, values: Iterable[str]
    ) -> "ListJobsOptionsBuilder":
        return self._set(token_descriptions=tuple(values))

    def set_components(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(components=tuple(values))

    def set_config_ids(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(config_ids=tuple(values))

    def set_config_row_ids(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(config_row_ids=tuple(values))

    def set_modes(self, values: Iterable[str]) -> "ListJobsOptionsBuilder":
        return self._set(modes=tuple(values))

    def set_statuses(
        self, values: Iterable[Union[JobStatus, str]]
    ) -> "ListJobsOptionsBuilder":
        try:
            statuses = tuple(JobStatus(value) for value in values)
        except ValueError as e:
            raise ClientError(f"Invalid job status: {e}") from e
        return self._set(statuses=statuses)

    def set_start_time_from(self, value: datetime) -> "ListJobsOptionsBuilder":
        return self._set(start_time_from=value)

    def set_start_time_to(self, value: datetime) -> "ListJobsOptionsBuilder":
        return self._set(start_time_to=value)

    def set_created_time_from(self, value: datetime) -> "ListJobsOptionsBuilder":
        return self._set(created_time_from=value)

    def set_created_time_to(self, value: datetime) -> "ListJobsOptionsBuilder":
        return self._set(created_time_to=value)

    def set_end_time_from(self, value: datetime) -> "ListJobsOptionsBuilder":
        return self._set(end_time_from=value)

    def set_end_time_to(self, value: datetime) -> "ListJobsOptionsBuilder":
        return self._set(end_time_to=value)

    def set_duration_seconds_from(self, value: int) -> "ListJobsOptionsBuilder":
        return self._set(duration_seconds_from=value)

    def set_duration_seconds_to(self, value: int) -> "ListJobsOptionsBuilder":
        return self._set(duration_seconds_to=value)

    def set_offset(self, value: int) -> "ListJobsOptionsBuilder":
        return self._set(offset=value)

    def set_limit(self, value: int) -> "ListJobsOptionsBuilder":
        return self._set(limit=value)

    def set_sort_by(self, value: str) -> "ListJobsOptionsBuilder":
        return self._set(sort_by=value)

    def set_sort_order(
        self, value: Union[SortOrder, str]
    ) -> "ListJobsOptionsBuilder":
        try:
            sort_order = SortOrder(value)
        except ValueError as e:
            allowed = ", ".join(order.value for order in SortOrder)
            raise ClientError(
                f'Allowed values for "sortOrder" are [{allowed}].'
            ) from e
        return self._set(sort_order=sort_order)

    def set_parent_run_id(self, value: Optional[str]) -> "ListJobsOptionsBuilder":
        """``""`` is sent as an empty filter; None removes the filter again."""
        return self._set(parent_run_id=value)

    def set_type(self, value: Union[JobType, str]) -> "ListJobsOptionsBuilder":
        try:
            job_type = JobType(value)
        except ValueError as e:
            raise ClientError(f"Invalid job type: {e}") from e
        return self._set(type=job_type)

    def build(self) -> ListJobsOptions:
        return self._options

    def query_parameters(self) -> dict[str, Any]:
        return self._options.query_parameters()
