"""Main server class for mcpserve."""

from typing import Any, Callable, Optional

from .config import ServerConfig
from .dispatcher import Dispatcher
from .endpoints import Body, Endpoints
from .prompts import FunctionPrompt, Prompt
from .registry import CapabilityRegistry
from .resources import FunctionResource, Resource
from .response import McpResponse
from .tools import FunctionTool, Tool


class McpServer:
    """An MCP server: a capability registry plus the dispatch pipeline.

    Capabilities are registered either as ``Tool``/``Resource``/``Prompt``
    instances or with the decorators, then ``build()`` freezes the registry
    and the server is ready to answer requests through ``handle()`` or the
    dispatcher methods.

    Example:
        server = McpServer("demo")

        @server.tool
        def echo(text: str) -> dict:
            \"\"\"Echo back the input text.\"\"\"
            return {"echoed": text}

        server.build()
        response = await server.handle("POST", "/tools/call",
                                       '{"name": "echo", "arguments": {"text": "hi"}}')
    """

    def __init__(self, name: str = "mcpserve", config: Optional[ServerConfig] = None):
        """Initialize a server.

        Args:
            name: Server name for identification
            config: Timeouts and body limit (defaults to ``ServerConfig()``)
        """
        self.name = name
        self.registry = CapabilityRegistry(config)
        self.dispatcher = Dispatcher(self.registry)
        self.endpoints = Endpoints(self.dispatcher)

    @property
    def config(self) -> ServerConfig:
        return self.registry.config

    @config.setter
    def config(self, value: ServerConfig) -> None:
        self.registry.config = value

    def register_tool(self, name: str, tool: Tool) -> None:
        self.registry.register_tool(name, tool)

    def register_resource(self, uri: str, resource: Resource) -> None:
        self.registry.register_resource(uri, resource)

    def register_prompt(self, name: str, prompt: Prompt) -> None:
        self.registry.register_prompt(name, prompt)

    def with_tool(self, name: str, tool: Tool) -> "McpServer":
        """Register a tool and return the server, for chaining."""
        self.register_tool(name, tool)
        return self

    def with_resource(self, uri: str, resource: Resource) -> "McpServer":
        self.register_resource(uri, resource)
        return self

    def with_prompt(self, name: str, prompt: Prompt) -> "McpServer":
        self.register_prompt(name, prompt)
        return self

    @property
    def tool(self):
        """Decorator for registering tools.

        Usage:
            @server.tool
            def add(a: int, b: int) -> int:
                return a + b

        Or with options:
            @server.tool(name="math.add", description="Add two integers")
            def add(a: int, b: int) -> int:
                return a + b
        """
        def decorator(func_or_options=None, **kwargs):
            if func_or_options is None:
                def inner_decorator(func: Callable) -> Callable:
                    tool = FunctionTool.from_function(func, **kwargs)
                    self.register_tool(tool.name, tool)
                    return func
                return inner_decorator
            elif callable(func_or_options):
                tool = FunctionTool.from_function(func_or_options, **kwargs)
                self.register_tool(tool.name, tool)
                return func_or_options
            else:
                raise TypeError("Invalid arguments to tool decorator")

        return decorator

    @property
    def resource(self):
        """Decorator for registering resources.

        Usage:
            @server.resource(uri="config://settings", mime_type="application/json")
            def settings() -> dict:
                return {"version": "1.0.0"}
        """
        def decorator(**options):
            def inner(func: Callable) -> Callable:
                if "uri" not in options:
                    raise ValueError("Resource decorator requires 'uri' parameter")
                uri = options.pop("uri")
                resource = FunctionResource.from_function(func, **options)
                self.register_resource(uri, resource)
                return func
            return inner

        return decorator

    @property
    def prompt(self):
        """Decorator for registering prompts.

        Usage:
            @server.prompt
            def code_review(language: str = "python") -> str:
                return f"Review this {language} code."
        """
        def decorator(func_or_options=None, **kwargs):
            if func_or_options is None:
                def inner_decorator(func: Callable) -> Callable:
                    prompt = FunctionPrompt.from_function(func, **kwargs)
                    self.register_prompt(prompt.name, prompt)
                    return func
                return inner_decorator
            elif callable(func_or_options):
                prompt = FunctionPrompt.from_function(func_or_options, **kwargs)
                self.register_prompt(prompt.name, prompt)
                return func_or_options
            else:
                raise TypeError("Invalid arguments to prompt decorator")

        return decorator

    def build(self) -> "McpServer":
        """Freeze the registry and return the server, ready to serve.

        Returns:
            The server instance
        """
        self.registry.freeze()
        return self

    async def handle(self, method: str, path: str, body: Body = None) -> McpResponse:
        """Answer one transport request; see ``Endpoints.handle``."""
        return await self.endpoints.handle(method, path, body)

    async def call_tool(self, name: str, arguments: Any = None) -> McpResponse:
        return await self.dispatcher.call_tool(name, arguments)

    async def read_resource(self, uri: str) -> McpResponse:
        return await self.dispatcher.read_resource(uri)

    async def get_prompt(self, name: str, arguments: Any = None) -> McpResponse:
        return await self.dispatcher.get_prompt(name, arguments)

    def __repr__(self) -> str:
        """String representation of the server."""
        counts = self.registry.counts()
        return (
            f"McpServer(name='{self.name}', "
            f"tools={counts['tools']}, "
            f"resources={counts['resources']}, "
            f"prompts={counts['prompts']})"
        )
