"""Tool capabilities: named actions with a JSON Schema for their input."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from .schema import schema_for_function
from .utils import call_function, describe_function


class Tool(ABC):
    """An action clients invoke by name with a JSON argument object.

    Subclasses provide ``description``, ``schema()`` and ``call()``. Any
    exception raised from ``call()`` is reported to the client as a tool
    execution failure carrying the exception's message. A plain ``def call``
    is accepted too; it runs in a worker thread.

    Example:
        class EchoTool(Tool):
            description = "Echo back the input text"

            def schema(self):
                return {
                    "type": "object",
                    "properties": {"text": {"type": "string"}},
                    "required": ["text"],
                }

            async def call(self, arguments):
                return {"echoed": arguments["text"]}
    """

    description: str = ""

    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        """JSON Schema the arguments must satisfy."""

    @abstractmethod
    async def call(self, arguments: Any) -> Any:
        """Run the tool and return a JSON-encodable result."""

    def to_dict(self, name: str) -> Dict[str, Any]:
        """Convert tool to its listing entry.

        Args:
            name: Name the tool is registered under

        Returns:
            MCP tool dictionary
        """
        return {
            "name": name,
            "description": self.description,
            "inputSchema": self.schema(),
        }


class FunctionTool(Tool):
    """A tool backed by a plain or async function."""

    def __init__(
        self,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None,
        input_schema: Optional[Dict[str, Any]] = None
    ):
        """Initialize a tool.

        Args:
            func: The function to wrap
            name: Tool name (defaults to function name)
            description: Tool description (defaults to the docstring)
            input_schema: Input schema (defaults to one derived from the
                docstring's ``# Arguments`` section or the signature)
        """
        self.func = func
        self.name = name or func.__name__
        self.description = (
            description if description is not None else describe_function(func)
        )
        self.input_schema = (
            input_schema if input_schema is not None else schema_for_function(func)
        )

    @classmethod
    def from_function(
        cls,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None,
        input_schema: Optional[Dict[str, Any]] = None
    ) -> "FunctionTool":
        return cls(func, name, description, input_schema)

    def schema(self) -> Dict[str, Any]:
        return self.input_schema

    async def call(self, arguments: Any) -> Any:
        return await call_function(self.func, arguments)

    def __repr__(self) -> str:
        return f"FunctionTool(name={self.name!r})"
