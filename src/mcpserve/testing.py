"""Helpers for testing capabilities in isolation.

They call a capability directly: no identifier checks, no schema gate, no
deadline. Use the dispatcher when those matter to the test.

Example:
    result = await invoke_tool(EchoTool(), {"text": "hello"})
    assert result["echoed"] == "hello"
"""

from typing import Any, Optional

from .prompts import Prompt
from .resources import Resource
from .tools import Tool


async def invoke_tool(tool: Tool, arguments: Optional[Any] = None) -> Any:
    return await tool.call({} if arguments is None else arguments)


async def invoke_resource(resource: Resource) -> str:
    return await resource.read()


async def invoke_prompt(prompt: Prompt, arguments: Optional[Any] = None) -> str:
    return await prompt.render({} if arguments is None else arguments)
