"""
Unit tests for the chat UI state store and its hint text.
"""

import json
import pytest
import httpx
from fastapi.testclient import TestClient

from src.domain.entities.message import MessageRole
from src.presentation.api.dependencies import (
    get_llm_client_factory,
    get_mcp_connector,
    get_session_repository,
)
from src.presentation.main import create_app
from src.presentation.ui.chat_store import RELAY_PATH, ChatStore
from src.presentation.ui.hints import (
    CONNECTION_CLOSED_TIPS,
    FILE_NOT_FOUND_TIP,
    MODULE_NOT_FOUND_TIP,
    connection_hint,
)
from src.infrastructure.repositories.in_memory_session_repository import (
    InMemorySessionRepository,
)

TOOLS = [
    {"name": "get_weather", "description": "Weather", "input_schema": {"type": "object"}},
    {"name": "echo", "description": "Echo", "input_schema": {"type": "object"}},
]


class FakeRelay:
    """Records relay requests and answers them from a queue."""

    def __init__(self):
        self.requests: list[dict] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, **body):
        self.responses.append(httpx.Response(status_code, json=body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        assert request.url.path == RELAY_PATH
        self.requests.append(json.loads(request.content))
        return self.responses.pop(0)

    @property
    def actions(self) -> list[str]:
        return [r["action"] for r in self.requests]


@pytest.fixture
def relay() -> FakeRelay:
    return FakeRelay()


@pytest.fixture
def store(relay) -> ChatStore:
    http = httpx.Client(
        base_url="http://relay.test", transport=httpx.MockTransport(relay.handler)
    )
    yield ChatStore(http=http, session_key="tab-1")
    http.close()


@pytest.fixture
def connected_store(store, relay) -> ChatStore:
    relay.reply(success=True, message="Connected to MCP server", tools=TOOLS)
    store.connect_to_server("node ./server/index.js")
    return store


class TestConnect:
    """Tests for ChatStore.connect_to_server."""

    def test_connect_seeds_transcript(self, connected_store, relay):
        assert relay.requests == [
            {"action": "connect", "sessionId": "tab-1", "serverPath": "node ./server/index.js"}
        ]
        assert connected_store.is_connected is True
        assert connected_store.is_loading is False
        assert [t.name for t in connected_store.tools] == ["get_weather", "echo"]
        assert connected_store.transcript() == [
            {
                "role": "assistant",
                "content": "MCP Client Started! Available tools: get_weather, echo",
            }
        ]

    def test_connect_failure(self, store, relay):
        relay.reply(400, success=False, message="Server script must be a .js or .py file")

        store.connect_to_server("./server.rb")

        assert store.is_connected is False
        assert store.is_loading is False
        assert store.last_error == "Server script must be a .js or .py file"
        assert store.transcript() == [
            {
                "role": "assistant",
                "content": "Error connecting to server: Server script must be a .js or .py file",
            }
        ]

    def test_connect_unreachable_relay(self, store):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        store.http = httpx.Client(
            base_url="http://relay.test", transport=httpx.MockTransport(refuse)
        )

        store.connect_to_server("server.py")

        assert store.is_connected is False
        assert "Connection refused" in store.last_error

    def test_non_json_response(self, store):
        store.http = httpx.Client(
            base_url="http://relay.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway")),
        )

        store.connect_to_server("server.py")

        assert store.last_error == "Unexpected response from relay (HTTP 502)"


class TestSendMessage:
    """Tests for ChatStore.send_message."""

    def test_not_connected(self, store, relay):
        store.send_message("hello")

        assert relay.requests == []
        assert store.transcript() == [
            {"role": "assistant", "content": "Not connected to MCP server."}
        ]

    def test_send_appends_user_then_reply(self, connected_store, relay):
        relay.reply(success=True, message="It is sunny.")

        connected_store.send_message("Weather in Paris?")

        assert relay.requests[-1] == {
            "action": "query",
            "sessionId": "tab-1",
            "message": "Weather in Paris?",
        }
        roles = [m.role for m in connected_store.messages]
        assert roles == [MessageRole.ASSISTANT, MessageRole.USER, MessageRole.ASSISTANT]
        assert connected_store.messages[-1].content == "It is sunny."
        assert connected_store.is_loading is False

    def test_send_failure_is_inlined(self, connected_store, relay):
        relay.reply(500, success=False, message="Error processing query: quota exceeded")

        connected_store.send_message("hello")

        assert connected_store.messages[-1].content == (
            "Error processing query: Error processing query: quota exceeded"
        )
        assert connected_store.is_connected is True

    @pytest.mark.parametrize("command", ["quit", "QUIT", "Quit"])
    def test_quit_disconnects_without_query(self, connected_store, relay, command):
        relay.reply(success=True, message="Disconnected from MCP server.")

        connected_store.send_message(command)

        assert relay.actions == ["connect", "disconnect"]
        assert connected_store.is_connected is False
        assert connected_store.tools == []
        assert connected_store.transcript()[-2:] == [
            {"role": "user", "content": command},
            {"role": "assistant", "content": "Disconnected from MCP server."},
        ]


class TestDisconnect:
    """Tests for ChatStore.disconnect_from_server."""

    def test_disconnect(self, connected_store, relay):
        relay.reply(success=True, message="Disconnected from MCP server.")

        connected_store.disconnect_from_server()

        assert connected_store.is_connected is False
        assert connected_store.messages[-1].content == "Disconnected from MCP server."

    def test_disconnect_twice_is_noop(self, connected_store, relay):
        relay.reply(success=True, message="Disconnected from MCP server.")

        connected_store.disconnect_from_server()
        connected_store.disconnect_from_server()

        assert relay.actions == ["connect", "disconnect"]

    def test_disconnect_failure_keeps_state(self, connected_store, relay):
        relay.reply(500, success=False, message="boom")

        connected_store.disconnect_from_server()

        assert connected_store.is_connected is True
        assert connected_store.last_error == "boom"
        assert len(connected_store.tools) == 2


class TestAgainstRelayApp:
    """Drives the store against the real relay app with mocked backends."""

    def test_full_conversation(self, mock_connector, mock_llm_client):
        app = create_app()
        repository = InMemorySessionRepository()
        app.dependency_overrides[get_session_repository] = lambda: repository
        app.dependency_overrides[get_mcp_connector] = lambda: mock_connector
        app.dependency_overrides[get_llm_client_factory] = lambda: (lambda: mock_llm_client)
        store = ChatStore(http=TestClient(app))

        store.connect_to_server("node ./server/index.js")
        store.send_message("hello")
        store.send_message("quit")

        assert [m["content"] for m in store.transcript()] == [
            "MCP Client Started! Available tools: get_weather, echo",
            "hello",
            "Hello from the model.",
            "quit",
            "Disconnected from MCP server.",
        ]
        assert store.is_connected is False


class TestConnectionHint:
    """Tests for connection failure hints."""

    def test_plain_error(self):
        assert connection_hint("boom") == "Failed to connect: boom"

    def test_connection_closed(self):
        hint = connection_hint("Failed to connect to MCP server: Connection closed")

        assert hint.endswith(CONNECTION_CLOSED_TIPS)
        assert "node path/to/file.js" in hint

    @pytest.mark.parametrize(
        "error", ["Error: Cannot find module '/tmp/x.js'", "No module named 'server'"]
    )
    def test_missing_module(self, error):
        assert connection_hint(error).endswith(MODULE_NOT_FOUND_TIP)

    @pytest.mark.parametrize(
        "error", ["spawn node ENOENT", "[Errno 2] No such file or directory: 'node'"]
    )
    def test_missing_file(self, error):
        assert connection_hint(error).endswith(FILE_NOT_FOUND_TIP)
