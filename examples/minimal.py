#!/usr/bin/env python3
"""Minimal mcpserve server - zero configuration required."""

import asyncio

from mcpserve import McpServer

server = McpServer("minimal")

@server.tool
def greet(name: str) -> str:
    return f"Hello, {name}!"

@server.resource(uri="text://motd")
def motd() -> str:
    """Message of the day."""
    return "Have a nice day"

server.build()


async def main():
    response = await server.handle(
        "POST", "/tools/call", '{"name": "greet", "arguments": {"name": "world"}}'
    )
    print(response.status, response.to_json())

    response = await server.handle("GET", "/health")
    print(response.status, response.to_json())


if __name__ == "__main__":
    asyncio.run(main())
