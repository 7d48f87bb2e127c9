from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Union

from src.domain.entities.tool import Tool


@dataclass(frozen=True)
class TextBlock:
    """Plain text produced by the model."""

    text: str


@dataclass(frozen=True)
class ToolUseBlock:
    """A request from the model to invoke a tool."""

    id: str
    name: str
    input: dict[str, Any] = field(default_factory=dict)


ContentBlock = Union[TextBlock, ToolUseBlock]


@dataclass(frozen=True)
class UserTurn:
    content: str


@dataclass(frozen=True)
class AssistantTurn:
    blocks: List[ContentBlock]


@dataclass(frozen=True)
class ToolResultTurn:
    tool_use_id: str
    name: str
    content: str


ConversationTurn = Union[UserTurn, AssistantTurn, ToolResultTurn]


class ILLMClient(ABC):
    """Interface for the language-model provider."""

    @abstractmethod
    async def complete(
        self,
        conversation: List[ConversationTurn],
        tools: List[Tool],
    ) -> List[ContentBlock]:
        """Send the conversation and tool catalog, return the reply's content blocks."""
        pass
