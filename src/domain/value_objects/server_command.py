import sys
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import ClassVar, List

from ..exceptions.domain_exceptions import (
    InvalidServerPathError,
    UnsupportedScriptTypeError,
)


@dataclass(frozen=True)
class ServerCommand:
    """Immutable value object describing how to launch an MCP server script.

    Built from a free-form path string such as ``node ./server/index.js``,
    ``python tools.py`` or just ``./server.py``.
    """

    command: str
    args: List[str] = field(default_factory=list)

    INTERPRETERS: ClassVar[frozenset[str]] = frozenset({"node", "python"})

    @classmethod
    def parse(cls, server_path: str, platform: str | None = None) -> "ServerCommand":
        """Resolve a server path string into a command and its arguments.

        If the first whitespace-separated token names a known interpreter, the
        remainder is the script path. Otherwise the interpreter is inferred
        from the file extension.

        Raises:
            InvalidServerPathError: If the path is empty
            UnsupportedScriptTypeError: If the extension is not .js or .py
        """
        parsed = (server_path or "").strip()
        if not parsed:
            raise InvalidServerPathError("Server path cannot be empty")

        parts = parsed.split(" ")
        if len(parts) > 1 and parts[0] in cls.INTERPRETERS:
            return cls(command=parts[0], args=[" ".join(parts[1:])])

        extension = PurePath(parsed).suffix.lower()
        if extension == ".js":
            return cls(command="node", args=[parsed])
        if extension == ".py":
            platform = platform or sys.platform
            command = "python" if platform == "win32" else "python3"
            return cls(command=command, args=[parsed])

        raise UnsupportedScriptTypeError("Server script must be a .js or .py file")

    @property
    def script_path(self) -> str:
        return self.args[0] if self.args else ""

    def __str__(self) -> str:
        return " ".join([self.command, *self.args])
