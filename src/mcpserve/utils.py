"""Helpers for capability implementations.

The ``extract_*`` functions pull typed values out of a tool's argument
object and raise ``ToolError`` with a precise reason when they cannot; the
``*_opt`` variants return None instead.
"""

import asyncio
import inspect
import json
from typing import Any, Callable, Mapping, Optional

from .docstring import ARGUMENTS_HEADING
from .errors import ToolError


def json_type_name(value: Any) -> str:
    """Name of the JSON type a Python value would encode as."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def to_text(value: Any) -> str:
    """Render a capability's return value as text; containers become JSON."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2)
    return str(value)


def _lookup(arguments: Any, param: str) -> Any:
    if not isinstance(arguments, Mapping) or param not in arguments:
        raise ToolError.missing_parameter(param)
    return arguments[param]


def _get(arguments: Any, param: str) -> Any:
    if not isinstance(arguments, Mapping):
        return None
    return arguments.get(param)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_string(arguments: Any, param: str) -> str:
    value = _lookup(arguments, param)
    if not isinstance(value, str):
        raise ToolError.invalid_type(param, "string", json_type_name(value))
    return value


def extract_string_opt(arguments: Any, param: str) -> Optional[str]:
    value = _get(arguments, param)
    return value if isinstance(value, str) else None


def extract_number(arguments: Any, param: str) -> float:
    value = _lookup(arguments, param)
    if not _is_number(value):
        raise ToolError.invalid_type(param, "number", json_type_name(value))
    return float(value)


def extract_number_opt(arguments: Any, param: str) -> Optional[float]:
    value = _get(arguments, param)
    return float(value) if _is_number(value) else None


def extract_integer(arguments: Any, param: str) -> int:
    """Integers only; ``2.0`` is accepted, ``2.5`` and booleans are not."""
    value = _lookup(arguments, param)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ToolError.invalid_type(param, "integer", json_type_name(value))
    return value


def extract_integer_opt(arguments: Any, param: str) -> Optional[int]:
    try:
        return extract_integer(arguments, param)
    except ToolError:
        return None


def extract_bool(arguments: Any, param: str) -> bool:
    value = _lookup(arguments, param)
    if not isinstance(value, bool):
        raise ToolError.invalid_type(param, "boolean", json_type_name(value))
    return value


def extract_bool_opt(arguments: Any, param: str) -> Optional[bool]:
    value = _get(arguments, param)
    return value if isinstance(value, bool) else None


def describe_function(func: Callable) -> str:
    """Description for a function capability: its docstring up to the
    ``# Arguments`` section."""
    doc = inspect.getdoc(func) or ""
    return doc.split(ARGUMENTS_HEADING, 1)[0].strip()


async def call_function(func: Callable, arguments: Any = None) -> Any:
    """Call ``func`` with the argument object spread as keyword arguments.

    Coroutine functions are awaited on the running loop. Plain functions run
    in a worker thread so that a deadline racing them can still fire.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise TypeError(
            f"arguments must be a JSON object, got {json_type_name(arguments)}"
        )
    if asyncio.iscoroutinefunction(func):
        return await func(**arguments)
    result = await asyncio.to_thread(func, **arguments)
    if inspect.isawaitable(result):
        result = await result
    return result
