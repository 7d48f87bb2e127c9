import asyncio
import logging
from dataclasses import dataclass
from typing import List

from src.domain.entities.relay_session import RelaySession
from src.domain.entities.tool import Tool
from src.domain.exceptions.domain_exceptions import InvalidServerPathError
from src.domain.repositories.i_relay_session_repository import IRelaySessionRepository
from src.domain.value_objects.server_command import ServerCommand
from src.domain.value_objects.session_id import SessionKey
from src.application.dtos.relay_dtos import RelayRequest, RelayResponse, ToolDTO
from src.application.interfaces.i_mcp_client import IMCPConnection, IMCPConnector
from src.application.use_cases.disconnect_server import close_session

logger = logging.getLogger(__name__)

CONNECTED_MESSAGE = "Connected to MCP server"
DEGRADED_MESSAGE = (
    "MCP Client Started! The server appears to be running, "
    "but tools could not be retrieved automatically."
)


@dataclass
class ConnectServerUseCase:
    """Use case for launching an MCP server and opening a relay session."""

    session_repository: IRelaySessionRepository
    connector: IMCPConnector
    tool_list_timeout: float = 30.0

    async def execute(self, request: RelayRequest) -> RelayResponse:
        """Connect to the MCP server named by ``request.server_path``.

        1. Reject an empty path, leaving any live session untouched
        2. Tear down any session already held under the same key
        3. Resolve the server path into a launch command
        4. Launch the server and complete the protocol handshake
        5. Fetch the tool catalog (degrading to a placeholder on failure)
        6. Store the new session

        Raises:
            InvalidServerPathError: If the path is empty
            UnsupportedScriptTypeError: If the script type is not supported
            ServerConnectionError: If launching or the handshake fails
        """
        key = SessionKey.from_optional(request.session_id)
        if not (request.server_path or "").strip():
            raise InvalidServerPathError("Server path cannot be empty")

        async with self.session_repository.lock_for(key):
            previous = await self.session_repository.pop(key)
            if previous:
                logger.info("Replacing existing session %s", key)
                await close_session(previous)

            command = ServerCommand.parse(request.server_path or "")
            logger.info(
                "Launching command: %s with script: %s",
                command.command,
                command.script_path,
            )

            connection = await self.connector.connect(command)
            try:
                tools, degraded = await self._list_tools(connection)
                session = RelaySession(
                    key=key,
                    command=command,
                    connection=connection,
                    tools=tools,
                    tools_degraded=degraded,
                )
                await self.session_repository.save(session)
                logger.info("Session %s ready with tools: %s", key, session.tool_names)
            except BaseException:
                await connection.close()
                raise

        return RelayResponse(
            success=True,
            message=DEGRADED_MESSAGE if degraded else CONNECTED_MESSAGE,
            tools=[ToolDTO.from_entity(tool) for tool in tools],
        )

    async def _list_tools(self, connection: IMCPConnection) -> tuple[List[Tool], bool]:
        """Return ``(tools, degraded)``; degraded means the placeholder was used."""
        try:
            tools = await asyncio.wait_for(
                connection.list_tools(), timeout=self.tool_list_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Timed out waiting for tools after %.1fs", self.tool_list_timeout
            )
            return [Tool.placeholder()], True
        except Exception as e:
            logger.warning("Error listing tools: %s", e)
            return [Tool.placeholder()], True

        logger.info("Discovered %d tools", len(tools))
        return list(tools), False
