"""Resource capabilities: read-only data addressed by URI."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from .utils import call_function, describe_function, to_text


class Resource(ABC):
    """Read-only data exposed under a URI.

    Subclasses provide ``name``, ``description``, ``mime_type`` and
    ``read()``, which takes no arguments and returns the content as text.
    """

    name: str = ""
    description: str = ""
    mime_type: str = "text/plain"

    @abstractmethod
    async def read(self) -> str:
        """Return the resource content."""

    def to_dict(self, uri: str) -> Dict[str, Any]:
        """Convert resource to its listing entry."""
        return {
            "uri": uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


class FunctionResource(Resource):
    """A resource whose content comes from calling a function."""

    def __init__(
        self,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None,
        mime_type: str = "text/plain"
    ):
        """Initialize a resource.

        Args:
            func: Function that provides the resource data
            name: Resource name (defaults to function name)
            description: Resource description (defaults to function docstring)
            mime_type: MIME type of the resource
        """
        self.func = func
        self.name = name or func.__name__
        self.description = (
            description if description is not None else describe_function(func)
        )
        self.mime_type = mime_type

    @classmethod
    def from_function(
        cls,
        func: Callable,
        name: Optional[str] = None,
        description: Optional[str] = None,
        mime_type: str = "text/plain"
    ) -> "FunctionResource":
        return cls(func, name, description, mime_type)

    async def read(self) -> str:
        """Call the function; dicts and lists are returned as JSON text."""
        return to_text(await call_function(self.func))

    def __repr__(self) -> str:
        return f"FunctionResource(name={self.name!r}, mime_type={self.mime_type!r})"
