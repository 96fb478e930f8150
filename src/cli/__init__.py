"""Command-line interface for the Confluence gateway.

This package provides the `confluence-gateway` CLI tool: one command per
gateway operation with JSON output, a local Markdown preview, and the MCP
stdio server.
"""

from .models import ExitCode
from .output import OutputHandler

__all__ = [
    'ExitCode',
    'OutputHandler',
]
