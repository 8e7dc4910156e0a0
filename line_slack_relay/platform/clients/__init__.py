"""Clients for external services.

This module provides the clients the relay talks to besides the platform SDKs,
currently the language-model client used for response suggestions.
"""

from line_slack_relay.platform.clients.llm import LlmClient

__all__ = [
    "LlmClient",
]
