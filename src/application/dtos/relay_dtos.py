from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.tool import Tool


class RelayAction(str, Enum):
    CONNECT = "connect"
    QUERY = "query"
    DISCONNECT = "disconnect"


class RelayRequest(BaseModel):
    """Request DTO for the single relay endpoint."""

    action: RelayAction
    server_path: Optional[str] = Field(default=None, alias="serverPath")
    message: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {"action": "connect", "serverPath": "node ./server/index.js"}
        }


class ToolDTO(BaseModel):
    """DTO representing a tool advertised by the MCP server."""

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, tool: Tool) -> "ToolDTO":
        return cls(
            name=tool.name,
            description=tool.description,
            input_schema=tool.input_schema,
        )


class RelayResponse(BaseModel):
    """Response DTO shared by every relay action."""

    success: bool
    message: str
    tools: Optional[List[ToolDTO]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Connected to MCP server",
                "tools": [
                    {
                        "name": "get_weather",
                        "description": "Get the current weather",
                        "input_schema": {"type": "object", "properties": {}},
                    }
                ],
            }
        }
