import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, List

from src.domain.entities.relay_session import RelaySession
from src.domain.exceptions.domain_exceptions import (
    EmptyMessageError,
    SessionNotConnectedError,
)
from src.domain.repositories.i_relay_session_repository import IRelaySessionRepository
from src.domain.value_objects.session_id import SessionKey
from src.application.dtos.relay_dtos import RelayRequest, RelayResponse
from src.application.interfaces.i_llm_client import (
    AssistantTurn,
    ConversationTurn,
    ILLMClient,
    TextBlock,
    ToolResultTurn,
    ToolUseBlock,
    UserTurn,
)

logger = logging.getLogger(__name__)


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _call_signature(block: ToolUseBlock) -> str:
    return f"{block.name}:{json.dumps(block.input, sort_keys=True, default=str)}"


@dataclass
class SendQueryUseCase:
    """Use case for relaying a user message to the LLM and its tool calls to MCP."""

    session_repository: IRelaySessionRepository
    llm_client_factory: Callable[[], ILLMClient]
    max_tool_rounds: int = 1

    async def execute(self, request: RelayRequest) -> RelayResponse:
        """Process a user message and return the concatenated reply.

        Text blocks are appended as-is. Each tool request is executed against
        the session's MCP server and its result (or error) is appended inline,
        so a failing tool never aborts the remaining blocks.

        The slot lock covers only the session lookup. A disconnect arriving
        mid-query closes the connection; tool calls still in flight then
        fail and are inlined like any other tool error.

        Raises:
            SessionNotConnectedError: If no session is active for the key
            EmptyMessageError: If the message is empty
        """
        key = SessionKey.from_optional(request.session_id)

        async with self.session_repository.lock_for(key):
            session = await self.session_repository.get(key)
        if session is None:
            raise SessionNotConnectedError("MCP server not connected")
        if not request.message:
            raise EmptyMessageError("Message cannot be empty")

        llm_client = self.llm_client_factory()
        reply = await self._run_rounds(llm_client, session, request.message)

        return RelayResponse(success=True, message=reply)

    async def _run_rounds(
        self,
        llm_client: ILLMClient,
        session: RelaySession,
        message: str,
    ) -> str:
        """Call the model, feeding tool results back while rounds remain.

        Stops when the model requests no tools, the round bound is reached,
        or a round only repeats tool calls already made.
        """
        rounds = max(1, self.max_tool_rounds)
        conversation: List[ConversationTurn] = [UserTurn(content=message)]
        output: List[str] = []
        seen_calls: set[str] = set()

        for round_number in range(1, rounds + 1):
            blocks = await llm_client.complete(conversation, session.tools)

            results: List[ToolResultTurn] = []
            made_new_call = False
            for block in blocks:
                if isinstance(block, TextBlock):
                    output.append(block.text)
                elif isinstance(block, ToolUseBlock):
                    signature = _call_signature(block)
                    if signature not in seen_calls:
                        made_new_call = True
                        seen_calls.add(signature)
                    results.append(await self._run_tool(session, block, output))

            if not results or round_number == rounds:
                break
            if not made_new_call:
                logger.info("Stopping tool loop: round %d repeated earlier calls", round_number)
                break

            conversation.append(AssistantTurn(blocks=list(blocks)))
            conversation.extend(results)

        return "".join(output)

    async def _run_tool(
        self,
        session: RelaySession,
        block: ToolUseBlock,
        output: List[str],
    ) -> ToolResultTurn:
        output.append(f"\n[Tool Call: {block.name}]\n")
        output.append(f"Input: {_to_json(block.input)}\n")

        logger.info("Tool selected: %s args=%s", block.name, block.input)
        try:
            result = await session.connection.call_tool(block.name, block.input)
        except Exception as e:
            logger.warning("Tool call %s failed: %s", block.name, e)
            output.append(f"\n[Tool Call Error: {_to_json(block.input or {})}]\n{e}\n")
            return ToolResultTurn(
                tool_use_id=block.id, name=block.name, content=f"Error: {e}"
            )

        rendered = _to_json(result)
        output.append(f"\nResult: {rendered}\n")
        return ToolResultTurn(tool_use_id=block.id, name=block.name, content=rendered)
