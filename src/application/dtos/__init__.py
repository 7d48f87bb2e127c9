from .relay_dtos import RelayAction, RelayRequest, RelayResponse, ToolDTO

__all__ = [
    "RelayAction",
    "RelayRequest",
    "RelayResponse",
    "ToolDTO",
]
