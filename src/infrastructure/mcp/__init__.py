# MCP (Model Context Protocol) Infrastructure
#
# This module provides:
# - A launcher that turns a server path into stdio launch parameters
# - A one-shot stdio client connection owning the server process
#
# MCP allows LLMs to securely access external tools and data sources
# through a standardized protocol.
