"""Value objects nested inside a Job payload."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, JsonValue, StrictStr

from job_queue_client.dto._parsing import as_id, as_mapping, parse_error


class Project(BaseModel):
    """Project that owns the job."""

    model_config = ConfigDict(frozen=True)

    id: str

    @classmethod
    def from_api_response(cls, response: Any) -> "Project":
        try:
            data = as_mapping(response)
            return cls(id=as_id(data["id"]))
        except (KeyError, TypeError, ValueError) as e:
            raise parse_error("Project", e) from e


class Token(BaseModel):
    """Storage token that created the job."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: Optional[StrictStr]

    @classmethod
    def from_api_response(cls, response: Any) -> "Token":
        try:
            data = as_mapping(response)
            return cls(id=as_id(data["id"]), description=data["description"])
        except (KeyError, TypeError, ValueError) as e:
            raise parse_error("Token", e) from e


class Backend(BaseModel):
    """Backend the job runs on. All parts are optional."""

    model_config = ConfigDict(frozen=True)

    context: Optional[StrictStr] = None
    container_type: Optional[StrictStr] = None
    type: Optional[StrictStr] = None

    @classmethod
    def from_api_response(cls, response: Any) -> "Backend":
        try:
            data = as_mapping(response)
            return cls(
                context=data.get("context"),
                container_type=data.get("containerType"),
                type=data.get("type"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise parse_error("Backend", e) from e


class Behavior(BaseModel):
    """Job behavior settings."""

    model_config = ConfigDict(frozen=True)

    on_error: Optional[StrictStr] = None

    @classmethod
    def from_api_response(cls, response: Any) -> "Behavior":
        try:
            data = as_mapping(response)
            return cls(on_error=data.get("onError"))
        except (KeyError, TypeError, ValueError) as e:
            raise parse_error("Behavior", e) from e


class VariableValuesData(BaseModel):
    """Inline variable values the job was started with."""

    model_config = ConfigDict(frozen=True)

    values: Optional[dict[str, JsonValue]] = None

    @classmethod
    def from_api_response(cls, response: Any) -> "VariableValuesData":
        try:
            data = as_mapping(response)
            values = data.get("values")
            if isinstance(values, list) and not values:
                values = {}
            return cls(values=values)
        except (KeyError, TypeError, ValueError) as e:
            raise parse_error("VariableValuesData", e) from e
