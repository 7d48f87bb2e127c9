import asyncio
from typing import List, Optional

from src.domain.entities.relay_session import RelaySession
from src.domain.repositories.i_relay_session_repository import IRelaySessionRepository
from src.domain.value_objects.session_id import SessionKey


class InMemorySessionRepository(IRelaySessionRepository):
    """Process-local repository for live relay sessions.

    Sessions hold open subprocess handles, so they are never serialized.
    """

    def __init__(self):
        self._sessions: dict[str, RelaySession] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, key: SessionKey) -> asyncio.Lock:
        lock = self._locks.get(key.value)
        if lock is None:
            lock = self._locks[key.value] = asyncio.Lock()
        return lock

    async def get(self, key: SessionKey) -> Optional[RelaySession]:
        return self._sessions.get(key.value)

    async def save(self, session: RelaySession) -> None:
        self._sessions[session.key.value] = session

    async def pop(self, key: SessionKey) -> Optional[RelaySession]:
        return self._sessions.pop(key.value, None)

    async def list_all(self) -> List[RelaySession]:
        return list(self._sessions.values())
