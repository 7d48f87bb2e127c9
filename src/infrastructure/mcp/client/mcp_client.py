"""
MCP Stdio Connection.

This module launches an MCP server as a child process and speaks the
protocol over its standard input/output. Each connection is owned by a
dedicated background task that enters the SDK's transport and session
contexts, so the connection can outlive the HTTP request that opened it
and still be torn down from any other request.

Readiness is established by the protocol ``initialize`` handshake,
retried with exponential backoff, rather than by a fixed delay.
"""

import asyncio
import logging
from typing import Any, Awaitable, List, TypeVar

from mcp import ClientSession
from mcp.client.stdio import stdio_client, StdioServerParameters

from src.application.interfaces.i_mcp_client import IMCPConnection, IMCPConnector
from src.domain.entities.tool import Tool
from src.domain.exceptions.domain_exceptions import ServerConnectionError
from src.domain.value_objects.server_command import ServerCommand
from src.infrastructure.mcp.launcher import build_server_parameters

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _root_cause(exc: BaseException) -> BaseException:
    """Unwrap task-group exception groups down to the first real error."""
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    return exc


class StdioMCPConnection(IMCPConnection):
    """One-shot MCP client connection over a child process's stdio."""

    def __init__(
        self,
        params: StdioServerParameters,
        handshake_timeout: float = 10.0,
        handshake_attempts: int = 3,
        handshake_backoff: float = 0.5,
        shutdown_timeout: float = 5.0,
    ):
        self._params = params
        self._handshake_timeout = handshake_timeout
        self._handshake_attempts = max(1, handshake_attempts)
        self._handshake_backoff = handshake_backoff
        self._shutdown_timeout = shutdown_timeout

        self._session: ClientSession | None = None
        self._runner: asyncio.Task | None = None
        self._ready = asyncio.Event()
        self._shutdown = asyncio.Event()
        self._error: BaseException | None = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._closed

    async def open(self) -> None:
        """Launch the server and wait until the handshake completes.

        Raises:
            ServerConnectionError: If the process cannot be started, exits,
                or never answers the handshake. The process is gone by the
                time this is raised.
        """
        if self._runner is not None:
            raise ServerConnectionError("MCP connection can only be opened once")

        self._runner = asyncio.create_task(
            self._run(), name=f"mcp-stdio:{self._params.command}"
        )
        await self._ready.wait()

        if self._session is None:
            await self._runner
            self._closed = True
            if self._error is None:
                raise ServerConnectionError("MCP server exited before becoming ready")
            cause = _root_cause(self._error)
            raise ServerConnectionError(str(cause) or type(cause).__name__) from cause

    async def _run(self) -> None:
        try:
            async with stdio_client(self._params) as (read, write):
                async with ClientSession(read, write) as session:
                    await self._handshake(session)
                    self._session = session
                    self._ready.set()
                    await self._shutdown.wait()
        except Exception as e:
            self._error = e
            if self._ready.is_set():
                logger.warning("MCP server connection ended: %s", _root_cause(e))
            else:
                logger.error("MCP server failed to start: %s", _root_cause(e))
        finally:
            self._session = None
            self._ready.set()

    async def _handshake(self, session: ClientSession) -> None:
        for attempt in range(1, self._handshake_attempts + 1):
            try:
                await asyncio.wait_for(
                    session.initialize(), timeout=self._handshake_timeout
                )
                logger.info("MCP handshake completed on attempt %d", attempt)
                return
            except asyncio.TimeoutError:
                if attempt == self._handshake_attempts:
                    raise ServerConnectionError(
                        f"Timed out waiting for MCP server after {attempt} attempts"
                    )
                delay = self._handshake_backoff * 2 ** (attempt - 1)
                logger.warning(
                    "MCP handshake attempt %d timed out, retrying in %.2fs",
                    attempt,
                    delay,
                )
                await asyncio.sleep(delay)

    def _require_session(self) -> ClientSession:
        if self._closed or self._session is None:
            raise ServerConnectionError("MCP connection is closed")
        return self._session

    async def _until_closed(self, coro: Awaitable[T]) -> T:
        """Await ``coro`` unless the connection is closed first."""
        call = asyncio.ensure_future(coro)
        closed = asyncio.ensure_future(self._shutdown.wait())
        try:
            done, _ = await asyncio.wait(
                {call, closed}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            closed.cancel()
            if not call.done():
                call.cancel()
        if call not in done:
            raise ServerConnectionError("MCP connection is closed")
        return call.result()

    async def list_tools(self) -> List[Tool]:
        """List tools from the connected server."""
        session = self._require_session()
        result = await self._until_closed(session.list_tools())
        return [
            Tool(
                name=tool.name,
                description=tool.description or "",
                input_schema=tool.inputSchema or {},
            )
            for tool in result.tools
        ]

    async def call_tool(self, tool_name: str, arguments: dict) -> Any:
        """Call a tool on the MCP server and return its content items."""
        session = self._require_session()
        result = await self._until_closed(session.call_tool(tool_name, arguments))
        return [
            item.model_dump(mode="json", exclude_none=True)
            for item in (result.content or [])
        ]

    async def close(self) -> None:
        """Signal the owning task to exit and wait for the process to stop."""
        if self._closed:
            return
        self._closed = True
        self._shutdown.set()

        runner = self._runner
        if runner is None or runner.done():
            return

        try:
            await asyncio.wait_for(runner, timeout=self._shutdown_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "MCP server did not stop within %.1fs; task cancelled",
                self._shutdown_timeout,
            )


class StdioMCPConnector(IMCPConnector):
    """Launches MCP servers as child processes and connects over stdio."""

    def __init__(
        self,
        api_key: str = "",
        handshake_timeout: float = 10.0,
        handshake_attempts: int = 3,
        handshake_backoff: float = 0.5,
        shutdown_timeout: float = 5.0,
    ):
        self._api_key = api_key
        self._handshake_timeout = handshake_timeout
        self._handshake_attempts = handshake_attempts
        self._handshake_backoff = handshake_backoff
        self._shutdown_timeout = shutdown_timeout

    async def connect(self, command: ServerCommand) -> StdioMCPConnection:
        params = build_server_parameters(command, api_key=self._api_key)
        connection = StdioMCPConnection(
            params,
            handshake_timeout=self._handshake_timeout,
            handshake_attempts=self._handshake_attempts,
            handshake_backoff=self._handshake_backoff,
            shutdown_timeout=self._shutdown_timeout,
        )
        await connection.open()
        return connection
