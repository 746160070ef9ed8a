"""Exception hierarchy raised by the job queue client.

Every failure surfaces as a ``ClientError``. When the server answered with an
HTTP error status the more specific ``ResponseError`` is raised instead, so
callers can branch on the semantic error code the API embeds in the body.
"""

from typing import Any, Optional


class ClientError(Exception):
    """Base error for anything that goes wrong inside the client."""

    def __init__(self, message: str, code: int = 0):
        self.message = message
        self.code = code
        super().__init__(message)


class ResponseError(ClientError):
    """The server returned an HTTP error response."""

    def __init__(
        self,
        message: str,
        code: int = 0,
        response_data: Optional[dict[str, Any]] = None,
    ):
        self.response_data = response_data
        super().__init__(message, code)

    @property
    def status_code(self) -> int:
        return self.code

    def get_error_code(self) -> Optional[str]:
        """Return ``context.errorCode`` from the response body, if any."""
        if not isinstance(self.response_data, dict):
            return None
        context = self.response_data.get("context")
        if not isinstance(context, dict):
            return None
        error_code = context.get("errorCode")
        # bool is an int subclass but never a valid error code
        if isinstance(error_code, bool):
            return None
        if isinstance(error_code, (int, float)):
            return str(error_code)
        if isinstance(error_code, str):
            return error_code
        return None

    def is_error_code(self, code: str) -> bool:
        return self.get_error_code() == code
