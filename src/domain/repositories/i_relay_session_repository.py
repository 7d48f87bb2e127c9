import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.relay_session import RelaySession
from ..value_objects.session_id import SessionKey


class IRelaySessionRepository(ABC):
    """Abstract repository interface for live relay sessions.

    Callers must hold ``lock_for(key)`` while reading and replacing the
    session stored under ``key``.
    """

    @abstractmethod
    def lock_for(self, key: SessionKey) -> asyncio.Lock:
        """Return the lock guarding the session slot for ``key``."""
        pass

    @abstractmethod
    async def get(self, key: SessionKey) -> Optional[RelaySession]:
        """Retrieve the active session for a key."""
        pass

    @abstractmethod
    async def save(self, session: RelaySession) -> None:
        """Store a session under its key."""
        pass

    @abstractmethod
    async def pop(self, key: SessionKey) -> Optional[RelaySession]:
        """Remove and return the session stored under a key."""
        pass

    @abstractmethod
    async def list_all(self) -> List[RelaySession]:
        """List every active session."""
        pass
