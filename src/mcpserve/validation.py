"""Identifier validation for tool names, prompt names and resource URIs.

Each validator returns ``None`` when the identifier is acceptable and the
specific error message otherwise. They are pure and are run both when a
capability is registered and again when a request names it.
"""

from typing import Any, Optional

MAX_NAME_LENGTH = 128
MAX_URI_LENGTH = 2048

_NAME_PUNCTUATION = frozenset("_-.")
_SCHEME_PUNCTUATION = frozenset("+-.")


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _validate_name(name: Any, label: str) -> Optional[str]:
    if not isinstance(name, str):
        return f"{label} name must be a string"
    if not name:
        return f"{label} name cannot be empty"
    if len(name) > MAX_NAME_LENGTH:
        return (
            f"{label} name '{name}' exceeds maximum length of "
            f"{MAX_NAME_LENGTH} characters"
        )
    for ch in name:
        if not (_is_ascii_alnum(ch) or ch in _NAME_PUNCTUATION):
            return (
                f"{label} name '{name}' contains invalid character '{ch}'. "
                "Only A-Z, a-z, 0-9, _, -, and . are allowed"
            )
    return None


def validate_tool_name(name: Any) -> Optional[str]:
    """Validate a tool name.

    Tool names are case-sensitive, 1 to 128 characters long and made only
    of ASCII letters, digits, ``_``, ``-`` and ``.``.

    Args:
        name: Candidate tool name

    Returns:
        Error message if invalid, None if valid

    Example:
        >>> validate_tool_name("admin.tools.list") is None
        True
        >>> validate_tool_name("")
        'Tool name cannot be empty'
    """
    return _validate_name(name, "Tool")


def validate_prompt_name(name: Any) -> Optional[str]:
    """Validate a prompt name. Same rules as tool names."""
    return _validate_name(name, "Prompt")


def validate_resource_uri(uri: Any) -> Optional[str]:
    """Validate a resource URI.

    A URI must be 1 to 2048 characters long (counted in code points) and
    have the shape ``scheme://path``: a non-empty scheme of ASCII letters,
    digits, ``+``, ``-`` and ``.``, and a non-empty path.

    Args:
        uri: Candidate resource URI

    Returns:
        Error message if invalid, None if valid
    """
    if not isinstance(uri, str):
        return "Resource URI must be a string"
    if not uri:
        return "Resource URI cannot be empty"
    if len(uri) > MAX_URI_LENGTH:
        return (
            f"Resource URI '{uri}' exceeds maximum length of "
            f"{MAX_URI_LENGTH} characters"
        )

    scheme, separator, path = uri.partition("://")
    if not separator:
        return (
            f"Resource URI '{uri}' is not a valid URI "
            "(missing scheme, expected format: scheme://path)"
        )
    if not scheme:
        return (
            f"Resource URI '{uri}' has empty scheme "
            "(expected format: scheme://path)"
        )
    if not all(_is_ascii_alnum(ch) or ch in _SCHEME_PUNCTUATION for ch in scheme):
        return (
            f"Resource URI '{uri}' has invalid scheme '{scheme}' "
            "(scheme must contain only alphanumeric, +, -, or . characters)"
        )
    if not path:
        return (
            f"Resource URI '{uri}' has empty path "
            "(expected format: scheme://path)"
        )
    return None
