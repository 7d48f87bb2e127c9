from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List

from .tool import Tool
from ..value_objects.server_command import ServerCommand
from ..value_objects.session_id import SessionKey


@dataclass
class RelaySession:
    """The live pairing of a launched MCP server and its discovered tools.

    ``connection`` is the protocol handle owning the subprocess; it is
    closed exactly once, when the session is torn down.
    """

    key: SessionKey
    command: ServerCommand
    connection: Any
    tools: List[Tool] = field(default_factory=list)
    tools_degraded: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def tool_names(self) -> List[str]:
        return [tool.name for tool in self.tools]
