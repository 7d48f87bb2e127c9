from .domain_exceptions import (
    RelayError,
    InvalidServerPathError,
    UnsupportedScriptTypeError,
    InvalidSessionKeyError,
    EmptyMessageError,
    SessionNotConnectedError,
    ServerConnectionError,
)

__all__ = [
    "RelayError",
    "InvalidServerPathError",
    "UnsupportedScriptTypeError",
    "InvalidSessionKeyError",
    "EmptyMessageError",
    "SessionNotConnectedError",
    "ServerConnectionError",
]
