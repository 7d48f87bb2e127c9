from .mcp_router import router as mcp_router

__all__ = ["mcp_router"]
