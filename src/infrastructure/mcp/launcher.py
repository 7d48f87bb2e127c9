"""
MCP Server Launcher.

Turns a resolved :class:`ServerCommand` into the stdio launch parameters
understood by the MCP SDK. The child process inherits the parent
environment plus the LLM provider API key.
"""

import os

from mcp.client.stdio import StdioServerParameters

from src.domain.value_objects.server_command import ServerCommand

API_KEY_ENV = "GEMINI_API_KEY"


def build_server_parameters(
    command: ServerCommand,
    api_key: str = "",
    cwd: str | None = None,
) -> StdioServerParameters:
    """Build stdio parameters for launching an MCP server process."""
    env = dict(os.environ)
    if api_key:
        env[API_KEY_ENV] = api_key

    return StdioServerParameters(
        command=command.command,
        args=list(command.args),
        env=env,
        cwd=cwd or os.getcwd(),
    )
