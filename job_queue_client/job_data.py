"""Submission payload for new jobs."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from job_queue_client.types import JobMode


@dataclass
class JobData:
    """What to run: component, configuration and run options.

    ``to_wire_format`` always emits every key; unset values go out as null.
    """

    component_id: str
    config_id: Optional[str] = None
    config_data: dict[str, Any] = field(default_factory=dict)
    mode: Union[JobMode, str] = JobMode.RUN
    config_row_ids: list[str] = field(default_factory=list)
    tag: Optional[str] = None
    branch_id: Optional[str] = None
    orchestration_job_id: Optional[str] = None
    parent_run_id: Optional[str] = None

    def to_wire_format(self) -> dict[str, Any]:
        return {
            "component": self.component_id,
            "config": self.config_id,
            "mode": JobMode(self.mode).value,
            "configRowIds": self.config_row_ids,
            "tag": self.tag,
            "branchId": self.branch_id,
            "orchestrationJobId": self.orchestration_job_id,
            "parentRunId": self.parent_run_id,
            "configData": self.config_data,
        }
