"""
Dependency Injection Configuration.

This module wires together all the concrete implementations
following Clean Architecture principles.
"""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends

from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.repositories.in_memory_session_repository import (
    InMemorySessionRepository,
)
from src.infrastructure.mcp.client.mcp_client import StdioMCPConnector
from src.infrastructure.llm.gemini_client import GeminiLLMClient

from src.application.interfaces.i_mcp_client import IMCPConnector
from src.application.interfaces.i_llm_client import ILLMClient
from src.domain.repositories.i_relay_session_repository import IRelaySessionRepository

from src.application.use_cases.connect_server import ConnectServerUseCase
from src.application.use_cases.send_query import SendQueryUseCase
from src.application.use_cases.disconnect_server import DisconnectServerUseCase


# Settings
def get_app_settings() -> Settings:
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# Session Repository (one per process: sessions own live subprocesses)
@lru_cache
def get_session_repository() -> IRelaySessionRepository:
    return InMemorySessionRepository()


SessionRepositoryDep = Annotated[
    IRelaySessionRepository, Depends(get_session_repository)
]


# MCP Connector
def get_mcp_connector(settings: SettingsDep) -> IMCPConnector:
    return StdioMCPConnector(
        api_key=settings.gemini_api_key,
        handshake_timeout=settings.handshake_timeout_seconds,
        handshake_attempts=settings.handshake_attempts,
        handshake_backoff=settings.handshake_backoff_seconds,
        shutdown_timeout=settings.shutdown_timeout_seconds,
    )


MCPConnectorDep = Annotated[IMCPConnector, Depends(get_mcp_connector)]


# LLM Client (built lazily so a missing key only fails queries)
def get_llm_client_factory(settings: SettingsDep) -> Callable[[], ILLMClient]:
    def factory() -> ILLMClient:
        return GeminiLLMClient(
            api_key=settings.gemini_api_key,
            model_name=settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )

    return factory


LLMClientFactoryDep = Annotated[
    Callable[[], ILLMClient], Depends(get_llm_client_factory)
]


# Use Cases
def get_connect_use_case(
    session_repository: SessionRepositoryDep,
    connector: MCPConnectorDep,
    settings: SettingsDep,
) -> ConnectServerUseCase:
    return ConnectServerUseCase(
        session_repository=session_repository,
        connector=connector,
        tool_list_timeout=settings.tool_list_timeout_seconds,
    )


ConnectUseCaseDep = Annotated[ConnectServerUseCase, Depends(get_connect_use_case)]


def get_query_use_case(
    session_repository: SessionRepositoryDep,
    llm_client_factory: LLMClientFactoryDep,
    settings: SettingsDep,
) -> SendQueryUseCase:
    return SendQueryUseCase(
        session_repository=session_repository,
        llm_client_factory=llm_client_factory,
        max_tool_rounds=settings.max_tool_rounds,
    )


QueryUseCaseDep = Annotated[SendQueryUseCase, Depends(get_query_use_case)]


def get_disconnect_use_case(
    session_repository: SessionRepositoryDep,
) -> DisconnectServerUseCase:
    return DisconnectServerUseCase(session_repository=session_repository)


DisconnectUseCaseDep = Annotated[
    DisconnectServerUseCase, Depends(get_disconnect_use_case)
]
