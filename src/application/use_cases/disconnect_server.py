import logging
from dataclasses import dataclass

from src.domain.entities.relay_session import RelaySession
from src.domain.repositories.i_relay_session_repository import IRelaySessionRepository
from src.domain.value_objects.session_id import SessionKey
from src.application.dtos.relay_dtos import RelayRequest, RelayResponse

logger = logging.getLogger(__name__)

DISCONNECTED_MESSAGE = "Disconnected from MCP server."


async def close_session(session: RelaySession) -> None:
    """Close a session's connection, logging and swallowing any failure."""
    try:
        await session.connection.close()
    except Exception as e:
        logger.error("Error closing MCP connection for session %s: %s", session.key, e)
    else:
        logger.info("MCP client resources cleaned up for session %s", session.key)


@dataclass
class DisconnectServerUseCase:
    """Use case for tearing down a relay session."""

    session_repository: IRelaySessionRepository

    async def execute(self, request: RelayRequest) -> RelayResponse:
        """Terminate the server process and close the client.

        Safe to call when no session is active.
        """
        key = SessionKey.from_optional(request.session_id)

        async with self.session_repository.lock_for(key):
            session = await self.session_repository.pop(key)
            if session:
                await close_session(session)

        return RelayResponse(success=True, message=DISCONNECTED_MESSAGE)

    async def disconnect_all(self) -> int:
        """Close every live session. Returns how many were closed."""
        sessions = await self.session_repository.list_all()
        for session in sessions:
            async with self.session_repository.lock_for(session.key):
                current = await self.session_repository.pop(session.key)
                if current:
                    await close_session(current)
        return len(sessions)
