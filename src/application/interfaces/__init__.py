from .i_mcp_client import IMCPConnection, IMCPConnector
from .i_llm_client import ILLMClient

__all__ = [
    "IMCPConnection",
    "IMCPConnector",
    "ILLMClient",
]
