"""
Shared pytest fixtures for all tests.
"""

import pytest
from unittest.mock import AsyncMock
from typing import List

from src.domain.entities.tool import Tool
from src.domain.entities.relay_session import RelaySession
from src.domain.value_objects.server_command import ServerCommand
from src.domain.value_objects.session_id import SessionKey
from src.application.interfaces.i_mcp_client import IMCPConnection, IMCPConnector
from src.application.interfaces.i_llm_client import ILLMClient, TextBlock
from src.infrastructure.repositories.in_memory_session_repository import (
    InMemorySessionRepository,
)


# ============================================================================
# Value Object Fixtures
# ============================================================================


@pytest.fixture
def node_server_path() -> str:
    return "node ./server/index.js"


@pytest.fixture
def test_server_command(node_server_path: str) -> ServerCommand:
    return ServerCommand.parse(node_server_path)


@pytest.fixture
def default_key() -> SessionKey:
    return SessionKey.default()


# ============================================================================
# Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_tools() -> List[Tool]:
    return [
        Tool(
            name="get_weather",
            description="Get the current weather for a city",
            input_schema={
                "type": "object",
                "properties": {"city": {"type": "string"}},
                "required": ["city"],
            },
        ),
        Tool(
            name="echo",
            description="Echo a message back",
            input_schema={
                "type": "object",
                "properties": {"message": {"type": "string"}},
            },
        ),
    ]


@pytest.fixture
def test_session(
    default_key: SessionKey,
    test_server_command: ServerCommand,
    mock_connection: AsyncMock,
    sample_tools: List[Tool],
) -> RelaySession:
    return RelaySession(
        key=default_key,
        command=test_server_command,
        connection=mock_connection,
        tools=sample_tools,
    )


# ============================================================================
# Mock Service Fixtures
# ============================================================================


@pytest.fixture
def mock_connection(sample_tools: List[Tool]) -> AsyncMock:
    """Mock IMCPConnection."""
    mock = AsyncMock(spec=IMCPConnection)
    mock.list_tools.return_value = sample_tools
    mock.call_tool.return_value = [{"type": "text", "text": "Sunny, 22C"}]
    mock.close.return_value = None
    return mock


@pytest.fixture
def mock_connector(mock_connection: AsyncMock) -> AsyncMock:
    """Mock IMCPConnector returning ``mock_connection``."""
    mock = AsyncMock(spec=IMCPConnector)
    mock.connect.return_value = mock_connection
    return mock


@pytest.fixture
def mock_llm_client() -> AsyncMock:
    """Mock ILLMClient answering with plain text."""
    mock = AsyncMock(spec=ILLMClient)
    mock.complete.return_value = [TextBlock(text="Hello from the model.")]
    return mock


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "e2e: mark test as an end-to-end test"
    )
