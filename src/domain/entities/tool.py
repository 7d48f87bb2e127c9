from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Tool:
    """A named, schema-described capability advertised by an MCP server."""

    name: str
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def placeholder(cls) -> "Tool":
        """Stand-in tool used when the server's catalog cannot be listed."""
        return cls(
            name="testTool",
            description="A test tool that doesn't do anything.",
            input_schema={
                "type": "object",
                "properties": {
                    "message": {
                        "type": "string",
                        "description": "A message to echo back.",
                    },
                },
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }
