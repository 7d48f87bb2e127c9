from abc import ABC, abstractmethod
from typing import Any, List

from src.domain.entities.tool import Tool
from src.domain.value_objects.server_command import ServerCommand


class IMCPConnection(ABC):
    """Interface for one MCP (Model Context Protocol) client connection.

    A connection owns the launched server process. It is one-shot: once
    closed it cannot be reopened or reused.
    """

    @abstractmethod
    async def list_tools(self) -> List[Tool]:
        """List the tools advertised by the server."""
        pass

    @abstractmethod
    async def call_tool(self, tool_name: str, arguments: dict) -> Any:
        """Invoke a tool and return its JSON-compatible result content."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Terminate the server process and close the client. Idempotent."""
        pass


class IMCPConnector(ABC):
    """Interface for launching an MCP server and connecting to it.

    Implementations can be swapped (e.g., stdio, SSE, websocket transports).
    """

    @abstractmethod
    async def connect(self, command: ServerCommand) -> IMCPConnection:
        """Launch the server described by ``command`` and complete the handshake.

        Raises:
            ServerConnectionError: If the process cannot be started or never
                becomes ready. No process is left running in that case.
        """
        pass
