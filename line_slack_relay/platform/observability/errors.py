"""Bugsnag error reporting integration.

ERROR-level log records (failed lookups, failed notifications, failed replies)
are forwarded to Bugsnag once it is configured.
"""

import logging

import bugsnag
from bugsnag.handlers import BugsnagHandler


async def initialize_bugsnag(api_key: str, release_stage: str) -> None:
    """Initialize Bugsnag error reporting.

    Configures Bugsnag with the provided API key and attaches a handler
    to the root logger to automatically report ERROR-level log entries.

    Args:
        api_key: Bugsnag project API key
        release_stage: Environment identifier (e.g., "production", "development", "local")

    Note:
        No-op when release_stage is "local" or no API key is configured.
    """
    if release_stage == "local" or not api_key:
        return
    logger = logging.getLogger()
    bugsnag.configure(
        api_key=api_key,
        release_stage=release_stage,
        auto_notify=True,
    )
    handler = BugsnagHandler()
    handler.setLevel(logging.ERROR)
    logger.addHandler(handler)
