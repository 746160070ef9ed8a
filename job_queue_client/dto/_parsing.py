"""Shared helpers for mapping raw API payloads into DTOs."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from job_queue_client.exceptions import ClientError


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Return ``value`` if it is a decoded JSON object, raise otherwise."""
    # the API serializes empty objects as []
    if isinstance(value, list) and not value:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    return value


def as_id(value: Any) -> str:
    """Ids come back as strings or numbers depending on the endpoint."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(
            f"expected a string or integer id, got {type(value).__name__}"
        )
    return str(value)


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO-8601 string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp {value!r} has no UTC offset")
    return parsed


def parse_optional_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return parse_timestamp(value)


def describe(error: Exception) -> str:
    """Render a parse failure as a single line."""
    if isinstance(error, KeyError):
        return f'Undefined key "{error.args[0]}"'
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
            for err in error.errors()
        )
    return str(error)


def parse_error(component: str, error: Exception) -> ClientError:
    """Build the component-named error for a failed DTO construction."""
    return ClientError(f"Failed to parse {component} data: {describe(error)}")
