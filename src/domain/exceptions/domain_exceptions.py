class RelayError(Exception):
    """Base exception for all domain-level errors."""

    pass


class InvalidServerPathError(RelayError):
    """Raised when the server path is empty or blank."""

    pass


class UnsupportedScriptTypeError(RelayError):
    """Raised when the server script is neither a .js nor a .py file."""

    pass


class InvalidSessionKeyError(RelayError):
    """Raised when a session key is not in a valid format."""

    pass


class EmptyMessageError(RelayError):
    """Raised when a query carries no message text."""

    pass


class SessionNotConnectedError(RelayError):
    """Raised when querying without an active MCP server session."""

    pass


class ServerConnectionError(RelayError):
    """Raised when the MCP server process cannot be launched or initialized."""

    pass
