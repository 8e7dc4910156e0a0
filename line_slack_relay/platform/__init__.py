"""Service infrastructure module.

This module provides the infrastructure the relay runs on:
- Settings loaded from the environment
- Language model client
- FastAPI server configuration
- Logging, metrics and error reporting
"""

from line_slack_relay.platform.clients import LlmClient
from line_slack_relay.platform.settings import Settings

__all__ = [
    "LlmClient",
    "Settings",
]
