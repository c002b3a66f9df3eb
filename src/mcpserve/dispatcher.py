"""Capability dispatch.

One pipeline per capability kind::

    validate identifier -> look up -> check arguments (tools only)
        -> invoke against the deadline -> shape the envelope

Each stage raises an ``McpError`` on failure; the public methods convert it
to exactly one ``McpResponse``. Nothing is retried.
"""

import asyncio
import inspect
import json
import logging
import math
from typing import Any, Callable, Optional

from .errors import (
    CapabilityError,
    CapabilityKind,
    InvalidIdentifierError,
    InvocationTimeout,
    McpError,
    NotFoundError,
    SchemaCompileError,
    SchemaViolationError,
    SerializationError,
    ToolError,
)
from .executor import TimeoutExecutor
from .registry import CapabilityRegistry
from .response import McpResponse
from .schema import validate_against_schema
from .tools import Tool
from .utils import to_text
from .validation import validate_prompt_name, validate_resource_uri, validate_tool_name

logger = logging.getLogger(__name__)


def _replace_non_finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _replace_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_replace_non_finite(item) for item in value]
    return value


def encode_result(result: Any) -> str:
    """Serialize a tool result as compact JSON.

    NaN and infinities are encoded as ``null``.

    Raises:
        SerializationError: If the result cannot be encoded
    """
    try:
        return json.dumps(
            _replace_non_finite(result),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        logger.error("Failed to serialize tool result: %s", exc)
        raise SerializationError(str(exc)) from exc


async def _call(method: Callable[..., Any], *args: Any) -> Any:
    """Run a capability method; plain methods go to a worker thread so the
    deadline can still fire while they block."""
    if inspect.iscoroutinefunction(method):
        return await method(*args)
    result = await asyncio.to_thread(method, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


class Dispatcher:
    """Routes list/call/read/get requests to registered capabilities."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        executor: Optional[TimeoutExecutor] = None
    ):
        self.registry = registry
        self.executor = executor or TimeoutExecutor()

    async def _guard(self, pipeline) -> McpResponse:
        try:
            return await pipeline
        except McpError as exc:
            return exc.to_response()
        except Exception as exc:
            logger.exception("Unexpected dispatch failure")
            return McpResponse.internal_error(f"Internal server error: {exc}")

    async def _invoke(
        self,
        kind: CapabilityKind,
        identifier: str,
        method: Callable[..., Any],
        *args: Any,
    ) -> Any:
        timeout = self.registry.config.timeout_for(kind)
        try:
            return await self.executor.run(kind, identifier, _call(method, *args), timeout)
        except InvocationTimeout as exc:
            logger.warning("%s", exc.message)
            raise
        except Exception as exc:
            logger.error("%s %s error: %s", kind.title, kind.action, exc)
            details = exc.details if isinstance(exc, ToolError) else None
            raise CapabilityError(kind, str(exc), details) from exc

    # Tools

    def list_tools(self) -> McpResponse:
        tools = [tool.to_dict(name) for name, tool in self.registry.tools.items()]
        return McpResponse.success({"tools": tools})

    async def call_tool(self, name: str, arguments: Any = None) -> McpResponse:
        """Call a registered tool.

        Args:
            name: Tool name
            arguments: Argument object (defaults to ``{}``)

        Returns:
            ``{"content": [{"type": "text", "text": <JSON result>}]}`` or an
            error envelope
        """
        return await self._guard(self._call_tool(name, arguments))

    async def _call_tool(self, name: str, arguments: Any) -> McpResponse:
        kind = CapabilityKind.TOOL
        error = validate_tool_name(name)
        if error is not None:
            raise InvalidIdentifierError(kind, error)

        tool = self.registry.get_tool(name)
        if tool is None:
            raise NotFoundError(kind, name)

        if arguments is None:
            arguments = {}
        self._check_arguments(name, tool, arguments)

        result = await self._invoke(kind, name, tool.call, arguments)
        return McpResponse.success({
            "content": [{"type": "text", "text": encode_result(result)}]
        })

    def _check_arguments(self, name: str, tool: Tool, arguments: Any) -> None:
        try:
            violations = validate_against_schema(arguments, tool.schema())
        except SchemaCompileError as exc:
            logger.warning("Failed to compile tool schema for %r: %s", name, exc.reason)
            raise
        if violations is not None:
            logger.debug(
                "Schema validation failed for tool %r with arguments %r: %s",
                name, arguments, violations,
            )
            raise SchemaViolationError(name, violations)

    # Resources

    def list_resources(self) -> McpResponse:
        resources = [
            resource.to_dict(uri) for uri, resource in self.registry.resources.items()
        ]
        return McpResponse.success({"resources": resources})

    async def read_resource(self, uri: str) -> McpResponse:
        """Read a registered resource.

        Returns:
            ``{"contents": [{"uri", "mimeType", "text"}]}`` or an error
            envelope
        """
        return await self._guard(self._read_resource(uri))

    async def _read_resource(self, uri: str) -> McpResponse:
        kind = CapabilityKind.RESOURCE
        error = validate_resource_uri(uri)
        if error is not None:
            raise InvalidIdentifierError(kind, error)

        resource = self.registry.get_resource(uri)
        if resource is None:
            raise NotFoundError(kind, uri)

        mime_type = resource.mime_type
        content = await self._invoke(kind, uri, resource.read)
        return McpResponse.success({
            "contents": [{"uri": uri, "mimeType": mime_type, "text": to_text(content)}]
        })

    # Prompts

    def list_prompts(self) -> McpResponse:
        prompts = [prompt.to_dict(name) for name, prompt in self.registry.prompts.items()]
        return McpResponse.success({"prompts": prompts})

    async def get_prompt(self, name: str, arguments: Any = None) -> McpResponse:
        """Render a registered prompt as a single user message."""
        return await self._guard(self._get_prompt(name, arguments))

    async def _get_prompt(self, name: str, arguments: Any) -> McpResponse:
        kind = CapabilityKind.PROMPT
        error = validate_prompt_name(name)
        if error is not None:
            raise InvalidIdentifierError(kind, error)

        prompt = self.registry.get_prompt(name)
        if prompt is None:
            raise NotFoundError(kind, name)

        if arguments is None:
            arguments = {}
        text = await self._invoke(kind, name, prompt.render, arguments)
        return McpResponse.success({
            "messages": [
                {"role": "user", "content": {"type": "text", "text": to_text(text)}}
            ]
        })

    def health(self) -> McpResponse:
        # Imported here to avoid a circular import with the package root
        from . import __version__

        body = {"status": "ok", "version": __version__}
        body.update(self.registry.counts())
        return McpResponse.success(body)
