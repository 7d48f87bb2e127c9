"""
Chat State Store.

Holds everything the chat UI renders (transcript, tool list, connection
and loading flags) and exposes the three user actions. Each action calls
the relay endpoint over HTTP; failures are turned into transcript
messages and never raised to the UI.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx

from src.application.dtos.relay_dtos import RelayResponse, ToolDTO
from src.domain.entities.message import Message

logger = logging.getLogger(__name__)

RELAY_PATH = "/api/mcp"
QUIT_COMMAND = "quit"


class RelayCallError(Exception):
    """Raised when the relay answers with ``success: false`` or garbage."""

    pass


@dataclass
class ChatStore:
    """Client-side state for one browser session."""

    http: httpx.Client
    session_key: str = field(default_factory=lambda: uuid.uuid4().hex)
    messages: List[Message] = field(default_factory=list)
    tools: List[ToolDTO] = field(default_factory=list)
    is_connected: bool = False
    is_loading: bool = False
    last_error: Optional[str] = None

    def _relay(self, action: str, **fields: Any) -> RelayResponse:
        payload = {"action": action, "sessionId": self.session_key, **fields}
        response = self.http.post(RELAY_PATH, json=payload)
        try:
            data = RelayResponse.model_validate(response.json())
        except ValueError as e:
            raise RelayCallError(
                f"Unexpected response from relay (HTTP {response.status_code})"
            ) from e
        if not data.success:
            raise RelayCallError(data.message)
        return data

    def connect_to_server(self, server_path: str) -> None:
        """Connect and seed the transcript with the discovered tools."""
        self.is_loading = True
        self.last_error = None
        try:
            data = self._relay("connect", serverPath=server_path)
        except Exception as e:
            logger.error("Failed to connect to server: %s", e)
            self.last_error = str(e)
            self.messages = [
                Message.assistant_message(f"Error connecting to server: {e}")
            ]
        else:
            self.tools = list(data.tools or [])
            self.is_connected = True
            names = ", ".join(tool.name for tool in self.tools)
            self.messages = [
                Message.assistant_message(f"MCP Client Started! Available tools: {names}")
            ]
            logger.info("Connected to MCP server")
        finally:
            self.is_loading = False

    def send_message(self, text: str) -> None:
        """Append the user message, then the reply or an inline error.

        The message ``quit`` disconnects instead of reaching the model.
        """
        if not self.is_connected:
            self.messages.append(Message.assistant_message("Not connected to MCP server."))
            return

        self.is_loading = True
        try:
            self.messages.append(Message.user_message(text))

            if text.lower() == QUIT_COMMAND:
                self.disconnect_from_server()
                return

            data = self._relay("query", message=text)
            self.messages.append(Message.assistant_message(data.message))
        except Exception as e:
            logger.error("Error processing query: %s", e)
            self.messages.append(
                Message.assistant_message(f"Error processing query: {e}")
            )
        finally:
            self.is_loading = False

    def disconnect_from_server(self) -> None:
        if not self.is_connected:
            return

        self.is_loading = True
        try:
            self._relay("disconnect")
        except Exception as e:
            logger.error("Error disconnecting from server: %s", e)
            self.last_error = str(e)
        else:
            self.is_connected = False
            self.tools = []
            self.messages.append(Message.assistant_message("Disconnected from MCP server."))
            logger.info("Disconnected from MCP server")
        finally:
            self.is_loading = False

    def transcript(self) -> List[dict]:
        return [message.to_dict() for message in self.messages]
