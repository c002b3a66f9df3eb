"""Request adapter between a transport and the dispatcher.

A transport hands over the HTTP method, the path and the raw body; it gets
back an ``McpResponse`` whose status and JSON body it forwards unchanged.
This module enforces the body-size limit and turns malformed requests into
400-class responses before the dispatcher sees them.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from .dispatcher import Dispatcher
from .errors import McpError, RequestError
from .response import McpResponse, StatusCode

logger = logging.getLogger(__name__)

Body = Optional[Union[bytes, bytearray, str]]

ROUTES = {
    "/health": ("GET", "health"),
    "/tools/list": ("GET", "list_tools"),
    "/tools/call": ("POST", "call_tool"),
    "/resources/list": ("GET", "list_resources"),
    "/resources/read": ("POST", "read_resource"),
    "/prompts/list": ("GET", "list_prompts"),
    "/prompts/get": ("POST", "get_prompt"),
}


class Endpoints:
    """Maps ``(method, path, body)`` onto dispatcher calls."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def handle(self, method: str, path: str, body: Body = None) -> McpResponse:
        """Handle one request.

        Args:
            method: HTTP method
            path: Request path, e.g. ``/tools/call``
            body: Raw request body for POST routes

        Returns:
            The response to send back
        """
        route = ROUTES.get(path)
        if route is None:
            return McpResponse.not_found(f"No route for {path}")
        expected_method, handler_name = route
        if method.upper() != expected_method:
            return McpResponse.error(
                StatusCode.METHOD_NOT_ALLOWED,
                f"Method {method.upper()} not allowed for {path}",
            )

        try:
            if expected_method == "GET":
                return getattr(self.dispatcher, handler_name)()
            payload = self.parse_body(body)
            return await getattr(self, f"_{handler_name}")(payload)
        except McpError as exc:
            logger.debug("Rejected %s %s: %s", method, path, exc.message)
            return exc.to_response()

    def parse_body(self, body: Body) -> Dict[str, Any]:
        """Decode a JSON object body within the configured size limit.

        Raises:
            RequestError: If the body is too large, not JSON, or not an object
        """
        if body is None:
            body = b""
        raw = body.encode("utf-8") if isinstance(body, str) else bytes(body)

        limit = self.dispatcher.registry.config.max_body_size
        if len(raw) > limit:
            raise RequestError(
                f"Request body exceeds maximum size of {limit} bytes",
                StatusCode.PAYLOAD_TOO_LARGE,
            )
        try:
            payload = json.loads(raw) if raw.strip() else None
        except (ValueError, RecursionError) as exc:
            raise RequestError(f"Invalid JSON body: {exc}") from exc
        if not isinstance(payload, dict):
            raise RequestError("Request body must be a JSON object")
        return payload

    @staticmethod
    def _field(payload: Dict[str, Any], key: str) -> str:
        value = payload.get(key)
        if not isinstance(value, str):
            raise RequestError(f"Missing '{key}' field in request")
        return value

    async def _call_tool(self, payload: Dict[str, Any]) -> McpResponse:
        name = self._field(payload, "name")
        return await self.dispatcher.call_tool(name, payload.get("arguments", {}))

    async def _read_resource(self, payload: Dict[str, Any]) -> McpResponse:
        uri = self._field(payload, "uri")
        return await self.dispatcher.read_resource(uri)

    async def _get_prompt(self, payload: Dict[str, Any]) -> McpResponse:
        name = self._field(payload, "name")
        return await self.dispatcher.get_prompt(name, payload.get("arguments", {}))
