"""Prompt capabilities: parameterized text templates."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from .schema import schema_for_function
from .utils import call_function, describe_function, to_text


class Prompt(ABC):
    """A named template rendered to a single user message.

    Subclasses provide ``description``, ``arguments()`` (a descriptor shown
    in listings) and ``render()``. Prompt arguments are not schema-checked
    before rendering; ``render()`` is expected to reject what it cannot use.
    """

    description: str = ""

    @abstractmethod
    def arguments(self) -> Any:
        """Descriptor of the accepted arguments."""

    @abstractmethod
    async def render(self, arguments: Any) -> str:
        """Render the prompt text."""

    def to_dict(self, name: str) -> Dict[str, Any]:
        """Convert prompt to its listing entry."""
        return {
            "name": name,
            "description": self.description,
            "arguments": self.arguments(),
        }


def arguments_from_schema(schema: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Turn an object schema into MCP prompt argument entries."""
    required = set(schema.get("required", []))
    arguments = []
    for prop_name, prop_schema in schema.get("properties", {}).items():
        arg: Dict[str, Any] = {"name": prop_name, "required": prop_name in required}
        if isinstance(prop_schema, dict) and prop_schema.get("description"):
            arg["description"] = prop_schema["description"]
        arguments.append(arg)
    return arguments


class FunctionPrompt(Prompt):
    """A prompt rendered by calling a function with the prompt arguments."""

    def __init__(
        self,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None
    ):
        """Initialize a prompt.

        Args:
            func: Function that renders the prompt text
            name: Prompt name (defaults to function name)
            description: Prompt description (defaults to function docstring)
        """
        self.func = func
        self.name = name or func.__name__
        self.description = (
            description if description is not None else describe_function(func)
        )
        self.input_schema = schema_for_function(func)

    @classmethod
    def from_function(
        cls,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> "FunctionPrompt":
        return cls(func, name, description)

    def arguments(self) -> List[Dict[str, Any]]:
        return arguments_from_schema(self.input_schema)

    async def render(self, arguments: Any) -> str:
        return to_text(await call_function(self.func, arguments))

    def __repr__(self) -> str:
        return f"FunctionPrompt(name={self.name!r})"
