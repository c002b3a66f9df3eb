"""Response envelopes returned by the dispatcher."""

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class StatusCode(IntEnum):
    """Status codes carried by MCP response envelopes."""

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    PAYLOAD_TOO_LARGE = 413
    INTERNAL_ERROR = 500
    GATEWAY_TIMEOUT = 504


@dataclass
class McpResponse:
    """A status code and the JSON body that goes with it.

    The transport layer is expected to forward both verbatim.
    """

    status: int
    body: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, result: Dict[str, Any]) -> "McpResponse":
        """Create a successful response.

        Args:
            result: The result envelope

        Returns:
            Response with status 200
        """
        return cls(StatusCode.OK, result)

    @classmethod
    def error(
        cls,
        code: int,
        message: str,
        details: Optional[str] = None
    ) -> "McpResponse":
        """Create an error response.

        Args:
            code: Status code, echoed into the body
            message: Error message
            details: Optional error details

        Returns:
            Error response
        """
        body: Dict[str, Any] = {"code": int(code), "message": message}
        if details is not None:
            body["details"] = details
        return cls(int(code), body)

    @classmethod
    def not_found(cls, message: str) -> "McpResponse":
        return cls.error(StatusCode.NOT_FOUND, message)

    @classmethod
    def internal_error(cls, message: str, details: Optional[str] = None) -> "McpResponse":
        return cls.error(StatusCode.INTERNAL_ERROR, message, details)

    def to_json(self) -> str:
        """Serialize the body for the wire."""
        return json.dumps(self.body)
