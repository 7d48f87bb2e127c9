from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class MessageRole(Enum):
    USER = "user"
    ASSISTANT = "assistant"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """One transcript line shown in the chat UI.

    Connection notices and inline errors are assistant messages; only text
    typed by the user carries the user role.
    """

    role: MessageRole
    content: str
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def user_message(cls, content: str) -> "Message":
        return cls(MessageRole.USER, content)

    @classmethod
    def assistant_message(cls, content: str) -> "Message":
        return cls(MessageRole.ASSISTANT, content)

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}
