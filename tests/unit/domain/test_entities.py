"""
Unit tests for domain entities.
"""

import pytest
from datetime import datetime, timezone
from freezegun import freeze_time

from src.domain.entities.message import Message, MessageRole
from src.domain.entities.tool import Tool
from src.domain.entities.relay_session import RelaySession
from src.domain.value_objects.server_command import ServerCommand
from src.domain.value_objects.session_id import SessionKey


class TestMessage:
    """Tests for Message entity."""

    def test_user_message_creation(self):
        """Test creating a user message."""
        message = Message.user_message("What's the weather?")

        assert message.role == MessageRole.USER
        assert message.content == "What's the weather?"
        assert isinstance(message.timestamp, datetime)

    def test_assistant_message_creation(self):
        """Test creating an assistant message."""
        message = Message.assistant_message("It's sunny.")

        assert message.role == MessageRole.ASSISTANT
        assert message.content == "It's sunny."

    @freeze_time("2024-01-15 10:30:00")
    def test_message_timestamp(self):
        """Messages are stamped with the current time."""
        message = Message.user_message("Hi")

        assert message.timestamp == datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)

    def test_message_immutability(self):
        """Test that Message is immutable (frozen dataclass)."""
        message = Message.user_message("Test")

        with pytest.raises(AttributeError):
            message.content = "Modified"

    def test_message_roles_enum(self):
        """Test all message roles exist."""
        assert MessageRole.USER.value == "user"
        assert MessageRole.ASSISTANT.value == "assistant"

    def test_to_dict(self):
        """Test conversion to a transcript entry."""
        message = Message.assistant_message("Done")

        assert message.to_dict() == {"role": "assistant", "content": "Done"}


class TestTool:
    """Tests for Tool entity."""

    def test_defaults(self):
        """A tool needs only a name."""
        tool = Tool(name="ping")

        assert tool.description == ""
        assert tool.input_schema == {}

    def test_placeholder(self):
        """The placeholder tool used when listing fails."""
        tool = Tool.placeholder()

        assert tool.name == "testTool"
        assert tool.description == "A test tool that doesn't do anything."
        assert tool.input_schema["type"] == "object"
        assert tool.input_schema["properties"]["message"]["type"] == "string"

    def test_to_dict(self):
        """Test wire representation."""
        tool = Tool(name="echo", description="Echo", input_schema={"type": "object"})

        assert tool.to_dict() == {
            "name": "echo",
            "description": "Echo",
            "input_schema": {"type": "object"},
        }


class TestRelaySession:
    """Tests for RelaySession entity."""

    @pytest.fixture
    def session(self, mock_connection, sample_tools) -> RelaySession:
        return RelaySession(
            key=SessionKey.default(),
            command=ServerCommand.parse("node ./index.js"),
            connection=mock_connection,
            tools=sample_tools,
        )

    def test_tool_names(self, session):
        """Test listing tool names."""
        assert session.tool_names == ["get_weather", "echo"]

    def test_defaults(self, mock_connection):
        """A fresh session has no tools and is not degraded."""
        session = RelaySession(
            key=SessionKey.default(),
            command=ServerCommand.parse("node ./index.js"),
            connection=mock_connection,
        )

        assert session.tools == []
        assert session.tools_degraded is False
        assert isinstance(session.created_at, datetime)
        assert session.created_at.tzinfo is timezone.utc
