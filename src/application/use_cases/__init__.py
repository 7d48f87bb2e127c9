from .connect_server import ConnectServerUseCase
from .send_query import SendQueryUseCase
from .disconnect_server import DisconnectServerUseCase

__all__ = [
    "ConnectServerUseCase",
    "SendQueryUseCase",
    "DisconnectServerUseCase",
]
