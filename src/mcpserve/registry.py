"""Capability registry.

Three independent maps (tools, resources, prompts) keyed by validated
identifier, plus the server configuration.

The registry does no locking. Populate it completely, then ``freeze()`` it
before serving; after that, dispatch only reads from it. Registering under
an existing key replaces the previous entry, and an invocation already
holding the old capability is unaffected.
"""

import logging
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, TypeVar

from .config import ServerConfig
from .errors import CapabilityKind, RegistrationError, RegistryFrozenError
from .prompts import Prompt
from .resources import Resource
from .tools import Tool
from .validation import validate_prompt_name, validate_resource_uri, validate_tool_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CapabilityRegistry:
    """Holds every capability a server exposes and its configuration."""

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self._tools: Dict[str, Tool] = {}
        self._resources: Dict[str, Resource] = {}
        self._prompts: Dict[str, Prompt] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark the registry as serving; later registrations are refused."""
        if not self._frozen:
            logger.debug(
                "Registry frozen with %d tools, %d resources, %d prompts",
                len(self._tools), len(self._resources), len(self._prompts),
            )
        self._frozen = True

    def _insert(
        self,
        kind: CapabilityKind,
        table: Dict[str, T],
        key: str,
        capability: T,
        expected: type,
        validate: Callable[[str], Optional[str]],
    ) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {kind.label} '{key}': registry is already serving"
            )
        error = validate(key)
        if error is not None:
            raise RegistrationError(
                f"Invalid {kind.label} {kind.identifier_label} '{key}': {error}"
            )
        if not isinstance(capability, expected):
            raise TypeError(
                f"{kind.title} '{key}' must be a {expected.__name__} instance, "
                f"got {type(capability).__name__}"
            )
        if key in table:
            logger.debug("Replacing %s %r", kind.label, key)
        else:
            logger.debug("Registered %s %r", kind.label, key)
        table[key] = capability

    def register_tool(self, name: str, tool: Tool) -> None:
        """Register a tool under ``name``.

        Raises:
            RegistrationError: If the name is invalid
            RegistryFrozenError: If the registry is already serving
        """
        self._insert(CapabilityKind.TOOL, self._tools, name, tool, Tool, validate_tool_name)

    def register_resource(self, uri: str, resource: Resource) -> None:
        """Register a resource under ``uri``.

        Raises:
            RegistrationError: If the URI is invalid
            RegistryFrozenError: If the registry is already serving
        """
        self._insert(
            CapabilityKind.RESOURCE, self._resources, uri, resource, Resource,
            validate_resource_uri,
        )

    def register_prompt(self, name: str, prompt: Prompt) -> None:
        """Register a prompt under ``name``.

        Raises:
            RegistrationError: If the name is invalid
            RegistryFrozenError: If the registry is already serving
        """
        self._insert(
            CapabilityKind.PROMPT, self._prompts, name, prompt, Prompt,
            validate_prompt_name,
        )

    def get_tool(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def get_resource(self, uri: str) -> Optional[Resource]:
        return self._resources.get(uri)

    def get_prompt(self, name: str) -> Optional[Prompt]:
        return self._prompts.get(name)

    @property
    def tools(self) -> Mapping[str, Tool]:
        return MappingProxyType(self._tools)

    @property
    def resources(self) -> Mapping[str, Resource]:
        return MappingProxyType(self._resources)

    @property
    def prompts(self) -> Mapping[str, Prompt]:
        return MappingProxyType(self._prompts)

    def counts(self) -> Dict[str, int]:
        return {
            "tools": len(self._tools),
            "resources": len(self._resources),
            "prompts": len(self._prompts),
        }

    def __repr__(self) -> str:
        return (
            f"CapabilityRegistry(tools={len(self._tools)}, "
            f"resources={len(self._resources)}, "
            f"prompts={len(self._prompts)}, frozen={self._frozen})"
        )
