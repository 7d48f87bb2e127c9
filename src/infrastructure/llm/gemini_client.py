"""
Gemini LLM Client.

Adapts LangChain's Google Generative AI chat model to the relay's
provider-neutral conversation and content-block types. The model is
given the MCP tool catalog as function declarations; its reply is
flattened back into an ordered list of text and tool-use blocks.
"""

from typing import Any, List

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    ToolMessage,
)
from langchain_google_genai import ChatGoogleGenerativeAI

from src.application.interfaces.i_llm_client import (
    AssistantTurn,
    ContentBlock,
    ConversationTurn,
    ILLMClient,
    TextBlock,
    ToolResultTurn,
    ToolUseBlock,
    UserTurn,
)
from src.domain.entities.tool import Tool

EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


def tool_to_function_spec(tool: Tool) -> dict[str, Any]:
    """Convert a :class:`Tool` into an OpenAI-style function declaration."""
    schema = {k: v for k, v in (tool.input_schema or {}).items() if k != "$schema"}
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description or "",
            "parameters": schema or EMPTY_SCHEMA,
        },
    }


def to_langchain_messages(conversation: List[ConversationTurn]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in conversation:
        if isinstance(turn, UserTurn):
            messages.append(HumanMessage(content=turn.content))
        elif isinstance(turn, AssistantTurn):
            text = "".join(b.text for b in turn.blocks if isinstance(b, TextBlock))
            tool_calls = [
                {"name": b.name, "args": b.input, "id": b.id}
                for b in turn.blocks
                if isinstance(b, ToolUseBlock)
            ]
            messages.append(AIMessage(content=text, tool_calls=tool_calls))
        elif isinstance(turn, ToolResultTurn):
            messages.append(
                ToolMessage(
                    content=turn.content,
                    tool_call_id=turn.tool_use_id,
                    name=turn.name,
                )
            )
    return messages


def to_content_blocks(reply: AIMessage) -> List[ContentBlock]:
    """Flatten a chat model reply into ordered content blocks.

    Text and ``tool_use`` parts inside ``reply.content`` keep their order.
    Tool calls reported only through ``reply.tool_calls`` are appended
    after them. Gemini reports its function calls that way, so for Gemini
    replies every tool result lands after all of the reply text.
    """
    blocks: List[ContentBlock] = []
    seen_ids: set[str] = set()

    content = reply.content
    if isinstance(content, str):
        if content:
            blocks.append(TextBlock(text=content))
    else:
        for part in content:
            if isinstance(part, str):
                blocks.append(TextBlock(text=part))
            elif part.get("type") == "text":
                blocks.append(TextBlock(text=part.get("text", "")))
            elif part.get("type") == "tool_use":
                call_id = part.get("id") or f"tool_call_{len(blocks)}"
                seen_ids.add(call_id)
                blocks.append(
                    ToolUseBlock(
                        id=call_id,
                        name=part["name"],
                        input=part.get("input") or {},
                    )
                )

    for index, call in enumerate(reply.tool_calls):
        call_id = call.get("id") or f"tool_call_{index}"
        if call_id in seen_ids:
            continue
        blocks.append(
            ToolUseBlock(id=call_id, name=call["name"], input=call.get("args") or {})
        )

    return blocks


class GeminiLLMClient(ILLMClient):
    """LLM client backed by Google's Gemini models through LangChain."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        temperature: float = 0.3,
        max_tokens: int = 1024,
    ):
        self._llm = ChatGoogleGenerativeAI(
            model=model_name,
            google_api_key=api_key,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

    async def complete(
        self,
        conversation: List[ConversationTurn],
        tools: List[Tool],
    ) -> List[ContentBlock]:
        llm: Any = self._llm
        if tools:
            llm = self._llm.bind_tools([tool_to_function_spec(t) for t in tools])

        reply = await llm.ainvoke(to_langchain_messages(conversation))
        return to_content_blocks(reply)
