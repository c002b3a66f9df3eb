"""JSON Schema extraction from structured docstrings.

Lets a capability author describe its arguments in prose instead of writing
a schema by hand::

    Look up a user.

    # Arguments
    * `user_id` - Identifier of the user (type: integer)
    * `verbose` - Include profile details (type: boolean, default: false)
    * `fields` - Comma separated field list (type: string, default: "name")

Declarations are lines starting with ``*`` inside the ``# Arguments``
section, which runs until the first blank line. The parameter name sits
between the first two backticks; an optional parenthesised group carries
``type:`` and ``default:`` annotations. Parameters without a default are
required.

The extractor is deliberately forgiving: malformed lines are skipped and
unknown types fall back to ``"object"``. It never raises.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

ARGUMENTS_HEADING = "# Arguments"

_TYPE_TOKENS = {
    "string": "string",
    "String": "string",
    "&str": "string",
    "str": "string",
    "integer": "integer",
    "int": "integer",
    "usize": "integer",
    "u32": "integer",
    "u64": "integer",
    "i32": "integer",
    "i64": "integer",
    "number": "number",
    "float": "number",
    "f32": "number",
    "f64": "number",
    "boolean": "boolean",
    "bool": "boolean",
}

_INT_LITERAL = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_LITERAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")


def schema_from_type(token: str) -> Dict[str, Any]:
    """Map a type token (``"f64"``, ``"str"``, ...) to a single-type schema."""
    return {"type": _TYPE_TOKENS.get(token, "object")}


def _empty_schema() -> Dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


def _arguments_section(text: str) -> Optional[List[str]]:
    start = text.find(ARGUMENTS_HEADING)
    if start == -1:
        return None
    lines = []
    for line in text[start:].splitlines():
        if not line.strip():
            break
        lines.append(line)
    return lines


def _keyed_field(content: str, key: str) -> Optional[str]:
    start = content.find(key)
    if start == -1:
        return None
    value = content[start + len(key):]
    return value.split(",", 1)[0].strip()


def parse_default(raw: str) -> Any:
    """Parse a ``default:`` annotation value.

    Tries an integer, then a float, then ``true``/``false``; anything else is
    a string with surrounding quotes removed.
    """
    if _INT_LITERAL.match(raw):
        return int(raw)
    if _FLOAT_LITERAL.match(raw):
        return float(raw)
    if raw in ("true", "false"):
        return raw == "true"
    return raw.strip('"').strip("'")


def _parse_annotations(tail: str) -> Tuple[str, bool, Any]:
    param_type = "object"
    has_default = False
    default = None

    paren_start = tail.find("(")
    if paren_start == -1:
        return param_type, has_default, default
    paren_end = tail.find(")", paren_start)
    if paren_end == -1:
        return param_type, has_default, default

    content = tail[paren_start + 1:paren_end]
    type_token = _keyed_field(content, "type:")
    if type_token is not None:
        param_type = _TYPE_TOKENS.get(type_token, "object")
    default_token = _keyed_field(content, "default:")
    if default_token is not None:
        has_default = True
        default = parse_default(default_token)
    return param_type, has_default, default


def _description(tail: str) -> str:
    desc = tail.strip()
    if desc.startswith("-"):
        desc = desc[1:]
    desc = desc.split("(type:", 1)[0]
    desc = desc.split("(default:", 1)[0]
    return desc.strip()


def extract_schema_from_docstring(text: str) -> Dict[str, Any]:
    """Build an object schema from the ``# Arguments`` section of a docstring.

    Args:
        text: Docstring or any other comment block

    Returns:
        JSON Schema with ``type``, ``properties`` and ``required``. The
        schema has no properties when there is no arguments section.
    """
    if not isinstance(text, str):
        return _empty_schema()
    section = _arguments_section(text)
    if section is None:
        return _empty_schema()

    properties: Dict[str, Dict[str, Any]] = {}
    optional = set()

    for raw_line in section:
        line = raw_line.strip()
        if not line.startswith("*"):
            continue

        name_start = line.find("`")
        if name_start == -1:
            continue
        name_end = line.find("`", name_start + 1)
        if name_end == -1:
            continue
        name = line[name_start + 1:name_end]
        if not name:
            continue

        tail = line[name_end + 1:]
        param_type, has_default, default = _parse_annotations(tail)

        prop: Dict[str, Any] = {"type": param_type}
        description = _description(tail)
        if description:
            prop["description"] = description
        if has_default:
            prop["default"] = default
            optional.add(name)
        else:
            optional.discard(name)
        properties[name] = prop

    return {
        "type": "object",
        "properties": properties,
        "required": [name for name in properties if name not in optional],
    }
