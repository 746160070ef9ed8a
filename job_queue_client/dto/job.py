"""Job snapshot as returned by the queue API."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, JsonValue, StrictBool, StrictInt, StrictStr

from job_queue_client.dto._parsing import (
    as_mapping,
    parse_error,
    parse_optional_timestamp,
    parse_timestamp,
)
from job_queue_client.dto.values import (
    Backend,
    Behavior,
    Project,
    Token,
    VariableValuesData,
)
from job_queue_client.types import DesiredStatus, JobMode, JobStatus, JobType


class Job(BaseModel):
    """A job in the queue.

    Instances are immutable and rebuilt from the server response on every
    call. Use ``Job.from_api_response`` to map a decoded JSON payload; it
    either returns a fully populated job or raises ``ClientError``.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    id: StrictStr
    run_id: StrictStr
    parent_run_id: StrictStr

    # Ownership
    project: Project
    token: Token

    # Submitted work (echoed back by the server)
    component: StrictStr
    config_id: Optional[StrictStr] = None
    config_data: JsonValue = None
    config_row_ids: Optional[list[StrictStr]] = None
    mode: JobMode
    branch_id: Optional[StrictStr] = None
    tag: Optional[StrictStr] = None
    orchestration_job_id: Optional[StrictStr] = None
    orchestration_task_id: Optional[StrictStr] = None
    only_orchestration_task_ids: Optional[list[JsonValue]] = None
    previous_job_id: Optional[StrictStr] = None

    # Lifecycle
    status: JobStatus
    desired_status: DesiredStatus
    is_finished: StrictBool
    created_time: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_seconds: Optional[StrictInt] = None

    # Execution metadata
    url: StrictStr
    executor: StrictStr
    backend: Backend
    metrics: JsonValue = None
    behavior: Behavior
    parallelism: Optional[StrictInt] = None
    type: JobType
    variable_values_id: Optional[StrictStr] = None
    variable_values_data: VariableValuesData
    result: JsonValue = None
    usage_data: JsonValue = None

    @classmethod
    def from_api_response(cls, response: Any) -> "Job":
        """Map a decoded API payload into a Job.

        Required keys must be present; optional ones fall back to None.
        Nested value objects raise their own component-named errors, which
        pass through unchanged.
        """
        try:
            data = as_mapping(response)
            return cls(
                id=data["id"],
                run_id=data["runId"],
                parent_run_id=data["parentRunId"],
                project=Project.from_api_response(data["project"]),
                token=Token.from_api_response(data["token"]),
                status=data["status"],
                desired_status=data["desiredStatus"],
                mode=data["mode"],
                component=data["component"],
                config_id=data.get("config"),
                config_data=data["configData"],
                config_row_ids=data.get("configRowIds"),
                tag=data.get("tag"),
                created_time=parse_timestamp(data["createdTime"]),
                start_time=parse_optional_timestamp(data.get("startTime")),
                end_time=parse_optional_timestamp(data.get("endTime")),
                duration_seconds=data.get("durationSeconds"),
                result=data.get("result"),
                usage_data=data.get("usageData"),
                is_finished=data["isFinished"],
                url=data["url"],
                branch_id=data.get("branchId"),
                variable_values_id=data.get("variableValuesId"),
                variable_values_data=VariableValuesData.from_api_response(
                    data["variableValuesData"]
                ),
                backend=Backend.from_api_response(data["backend"]),
                executor=data["executor"],
                metrics=data["metrics"],
                behavior=Behavior.from_api_response(data["behavior"]),
                parallelism=data.get("parallelism"),
                type=data["type"],
                orchestration_job_id=data.get("orchestrationJobId"),
                orchestration_task_id=data.get("orchestrationTaskId"),
                only_orchestration_task_ids=data.get("onlyOrchestrationTaskIds"),
                previous_job_id=data.get("previousJobId"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise parse_error("Job", e) from e

    def is_success(self) -> bool:
        return self.status == JobStatus.SUCCESS

    def is_error(self) -> bool:
        return self.status == JobStatus.ERROR
