"""JSON Schema generation and argument validation.

Schemas for function-backed capabilities are derived from an ``# Arguments``
docstring section or from the function signature. Validation of caller
arguments is delegated to ``jsonschema``.
"""

import inspect
import types
import typing
from typing import Any, Callable, Dict, List, Optional, Union, get_args, get_origin

from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from .docstring import ARGUMENTS_HEADING, extract_schema_from_docstring
from .errors import SchemaCompileError

# PEP 604 unions (``int | None``) on interpreters that have them
_UNION_TYPES = (Union, getattr(types, "UnionType", Union))

_SIMPLE_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
    type(None): "null",
}


def python_type_to_json_schema(python_type: Any) -> Dict[str, Any]:
    """Convert a Python type annotation to JSON Schema.

    Args:
        python_type: Annotation to convert

    Returns:
        JSON Schema; an empty schema (accepting anything) for types it
        cannot express
    """
    if python_type in _SIMPLE_TYPES:
        return {"type": _SIMPLE_TYPES[python_type]}
    if python_type is Any:
        return {}

    origin = get_origin(python_type)
    args = get_args(python_type)

    if origin in _UNION_TYPES:
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            # Optional[T]
            schema = python_type_to_json_schema(non_none[0])
            if "type" not in schema:
                return {"oneOf": [schema, {"type": "null"}]}
            type_names = schema["type"] if isinstance(schema["type"], list) else [schema["type"]]
            schema["type"] = type_names + ["null"]
            return schema
        return {"oneOf": [python_type_to_json_schema(arg) for arg in args]}

    if origin in (list, List):
        if args:
            return {"type": "array", "items": python_type_to_json_schema(args[0])}
        return {"type": "array"}

    if origin in (dict, Dict):
        if len(args) == 2:
            return {
                "type": "object",
                "additionalProperties": python_type_to_json_schema(args[1]),
            }
        return {"type": "object"}

    return {}


def _resolved_hints(func: Callable) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to raw annotations.
        return dict(getattr(func, "__annotations__", {}))


def generate_function_input_schema(func: Callable) -> Dict[str, Any]:
    """Generate an input schema from a function's signature.

    Parameters without a default value are required.

    Args:
        func: Function to analyze

    Returns:
        JSON Schema for the function's keyword arguments
    """
    hints = _resolved_hints(func)
    properties = {}
    required = []

    for param_name, param in inspect.signature(func).parameters.items():
        if param_name == "self":
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue

        properties[param_name] = python_type_to_json_schema(hints.get(param_name, Any))
        if param.default is inspect.Parameter.empty:
            required.append(param_name)

    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def compile_schema(schema: Any):
    """Build a ``jsonschema`` validator for a declared schema.

    Raises:
        SchemaCompileError: If the schema is not a valid JSON Schema
    """
    if not isinstance(schema, (dict, bool)):
        raise SchemaCompileError(
            f"schema must be an object or a boolean, got {type(schema).__name__}"
        )
    try:
        validator_cls = validator_for(schema)
    except (AttributeError, TypeError, ValueError) as exc:
        raise SchemaCompileError(f"unusable $schema: {exc}") from exc
    try:
        validator_cls.check_schema(schema)
    except SchemaError as exc:
        raise SchemaCompileError(exc.message) from exc
    return validator_cls(schema)


def json_pointer(path) -> str:
    """Render an error path as a JSON pointer, or ``root`` when empty."""
    parts = [str(part).replace("~", "~0").replace("/", "~1") for part in path]
    if not parts:
        return "root"
    return "/" + "/".join(parts)


def validate_against_schema(value: Any, schema: Any) -> Optional[str]:
    """Validate a value against a JSON Schema.

    Every violation is reported, as ``"<path>: <message>"`` joined by
    ``", "``.

    Args:
        value: Value to validate
        schema: JSON Schema to validate against

    Returns:
        Error message if validation fails, None if valid

    Raises:
        SchemaCompileError: If the schema itself is invalid
    """
    validator = compile_schema(schema)
    errors = sorted(validator.iter_errors(value), key=lambda e: json_pointer(e.path))
    if not errors:
        return None
    return ", ".join(f"{json_pointer(e.path)}: {e.message}" for e in errors)


def schema_for_function(func: Callable) -> Dict[str, Any]:
    """Input schema for a function capability.

    A docstring with an ``# Arguments`` section wins; otherwise the schema
    comes from the signature.
    """
    doc = inspect.getdoc(func) or ""
    if ARGUMENTS_HEADING in doc:
        return extract_schema_from_docstring(doc)
    return generate_function_input_schema(func)
