"""Error taxonomy for capability dispatch.

Every failure inside the dispatch pipeline is raised as an ``McpError``
subclass and turned into a response exactly once, at the dispatcher
boundary, through ``McpError.to_response``.
"""

from enum import Enum
from typing import Any, Dict, Optional

from .response import McpResponse, StatusCode


class CapabilityKind(Enum):
    """The three kinds of capability a server exposes."""

    TOOL = ("tool", "execution", "name")
    RESOURCE = ("resource", "read", "URI")
    PROMPT = ("prompt", "render", "name")

    def __init__(self, label: str, action: str, identifier_label: str):
        self.label = label
        self.action = action
        self.identifier_label = identifier_label

    @property
    def title(self) -> str:
        return self.label.capitalize()


def format_duration(seconds: float) -> str:
    """Render a duration the way timeout messages show it (``30s``, ``500ms``)."""
    if seconds >= 1:
        return f"{seconds:g}s"
    return f"{seconds * 1000:g}ms"


class McpError(Exception):
    """Base class for failures that become an error response."""

    status: int = StatusCode.INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> McpResponse:
        """Map this error to its response envelope."""
        return McpResponse.error(self.status, self.message, self.details)


class RequestError(McpError):
    """The request itself is unusable (bad JSON, missing field, too large)."""

    def __init__(self, message: str, status: int = StatusCode.BAD_REQUEST):
        super().__init__(message)
        self.status = status


class InvalidIdentifierError(McpError):
    status = StatusCode.BAD_REQUEST

    def __init__(self, kind: CapabilityKind, reason: str):
        super().__init__(f"Invalid {kind.label} {kind.identifier_label}: {reason}")
        self.kind = kind
        self.reason = reason


class NotFoundError(McpError):
    status = StatusCode.NOT_FOUND

    def __init__(self, kind: CapabilityKind, identifier: str):
        super().__init__(f"{kind.title} '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier


class SchemaViolationError(McpError):
    """Caller-supplied arguments do not satisfy the tool's input schema."""

    status = StatusCode.BAD_REQUEST

    def __init__(self, name: str, violations: str):
        super().__init__(
            f"Arguments for tool '{name}' failed schema validation: {violations}"
        )
        self.name = name
        self.violations = violations


class SchemaCompileError(McpError):
    """A declared schema is itself invalid.

    This is a server misconfiguration; the underlying reason is kept on
    ``reason`` for logging and never reaches the caller.
    """

    status = StatusCode.INTERNAL_ERROR

    def __init__(self, reason: str):
        super().__init__("Invalid tool schema configuration")
        self.reason = reason


class CapabilityError(McpError):
    """A capability reported a failure while running."""

    status = StatusCode.INTERNAL_ERROR

    def __init__(
        self,
        kind: CapabilityKind,
        message: str,
        details: Optional[str] = None
    ):
        super().__init__(f"{kind.title} {kind.action} failed: {message}", details)
        self.kind = kind
        self.original_message = message


class InvocationTimeout(McpError):
    status = StatusCode.INTERNAL_ERROR

    def __init__(self, kind: CapabilityKind, identifier: str, timeout: float):
        super().__init__(
            f"{kind.title} '{identifier}' {kind.action} timed out after "
            f"{format_duration(timeout)}"
        )
        self.kind = kind
        self.identifier = identifier
        self.timeout = timeout


class SerializationError(McpError):
    status = StatusCode.INTERNAL_ERROR

    def __init__(self, reason: str):
        super().__init__("Failed to serialize tool result")
        self.reason = reason


class RegistrationError(ValueError):
    """Raised when a capability is registered under an invalid identifier."""


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that is already serving."""


class ToolError(Exception):
    """Structured error a tool can raise instead of a bare exception.

    Dispatch still reports it as a tool execution failure; the extra fields
    are for tools and clients that want a finer-grained classification.
    """

    def __init__(
        self,
        message: str,
        status_code: int = StatusCode.INTERNAL_ERROR,
        error_type: str = "ExecutionFailed",
        details: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.error_type = error_type
        self.details = details

    @classmethod
    def missing_parameter(cls, param: str) -> "ToolError":
        return cls(
            f"Missing required parameter: {param}",
            StatusCode.BAD_REQUEST,
            "MissingParameter",
        )

    @classmethod
    def invalid_type(cls, param: str, expected: str, got: str) -> "ToolError":
        return cls(
            f"Invalid parameter '{param}': expected {expected}, got {got}",
            StatusCode.BAD_REQUEST,
            "InvalidType",
            f"Parameter '{param}' should be {expected} but got {got}",
        )

    @classmethod
    def invalid_value(cls, param: str, reason: str) -> "ToolError":
        return cls(
            f"Invalid value for parameter '{param}': {reason}",
            StatusCode.BAD_REQUEST,
            "InvalidValue",
            f"Parameter '{param}' is invalid: {reason}",
        )

    @classmethod
    def execution_failed(cls, message: str) -> "ToolError":
        return cls(f"Execution failed: {message}")

    @classmethod
    def timeout(cls, seconds: int) -> "ToolError":
        return cls(
            f"Execution timed out after {seconds} seconds",
            StatusCode.GATEWAY_TIMEOUT,
            "Timeout",
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "code": self.status_code,
            "message": self.message,
            "error_type": self.error_type,
        }
        if self.details is not None:
            result["details"] = self.details
        return result
