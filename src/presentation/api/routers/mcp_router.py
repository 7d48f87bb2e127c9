"""
MCP Relay Router - The single endpoint the chat UI talks to.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.application.dtos.relay_dtos import RelayAction, RelayRequest, RelayResponse
from src.domain.exceptions.domain_exceptions import RelayError, ServerConnectionError
from src.presentation.api.dependencies import (
    ConnectUseCaseDep,
    DisconnectUseCaseDep,
    QueryUseCaseDep,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["mcp"])


def _failure(status_code: int, message: str) -> JSONResponse:
    body = RelayResponse(success=False, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/mcp",
    response_model=RelayResponse,
    response_model_exclude_none=True,
    summary="Relay an MCP chat action",
    description="Connect to an MCP server, send it a query, or disconnect.",
)
async def relay(
    request: Request,
    connect_use_case: ConnectUseCaseDep,
    query_use_case: QueryUseCaseDep,
    disconnect_use_case: DisconnectUseCaseDep,
):
    """Dispatch on the request's ``action`` field.

    - ``connect``: launch the server at ``serverPath`` and list its tools
    - ``query``: send ``message`` to the LLM, running any requested tools
    - ``disconnect``: stop the server; safe to repeat
    """
    try:
        payload = await request.json()
        relay_request = RelayRequest.model_validate(payload)
    except (ValueError, ValidationError):
        return _failure(status.HTTP_400_BAD_REQUEST, "Invalid action")

    if relay_request.action == RelayAction.CONNECT:
        try:
            return await connect_use_case.execute(relay_request)
        except ServerConnectionError as e:
            return _failure(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                f"Failed to connect to MCP server: {e}",
            )
        except RelayError as e:
            return _failure(status.HTTP_400_BAD_REQUEST, str(e))
        except Exception as e:
            logger.exception("Failed to connect to MCP server")
            return _failure(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                f"Failed to connect to MCP server: {e}",
            )

    if relay_request.action == RelayAction.QUERY:
        try:
            return await query_use_case.execute(relay_request)
        except RelayError as e:
            return _failure(status.HTTP_400_BAD_REQUEST, str(e))
        except Exception as e:
            logger.exception("Error processing query")
            return _failure(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                f"Error processing query: {e}",
            )

    try:
        return await disconnect_use_case.execute(relay_request)
    except RelayError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, str(e))
