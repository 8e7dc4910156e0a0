"""
HTTP health state and service metadata.
"""

import datetime
import os
import platform
import socket
import threading
import time

from line_slack_relay.platform.constants import SERVICE_NAME

__all__ = ["HealthCheck", "MetadataManager", "metadata"]


class HealthCheck:
    """Thread-safe health check state manager.

    The service reports healthy between startup and the beginning of a
    graceful drain.
    """

    _health_check_enabled = threading.Event()

    @staticmethod
    def enable() -> None:
        """Mark the service as healthy."""
        HealthCheck._health_check_enabled.set()

    @staticmethod
    def disable() -> None:
        """Mark the service as unhealthy so load balancers stop routing to it."""
        HealthCheck._health_check_enabled.clear()

    @staticmethod
    def status() -> bool:
        return HealthCheck._health_check_enabled.is_set()


class MetadataManager:
    """
    Static build and host metadata served on ``/info``. One is created on
    import; add entries to its ``metadata`` dictionary for other static data.
    """

    # keys to read from the environment
    ENV_INFO_KEYS = [
        "BUILD_DATE",
        "BUILD_VERSION",
        "GIT_COMMIT",
        "IMAGE_NAME",
        "SERVICE_ID",
        "SERVICE_NAME",
    ]
    HOSTNAME_KEY = "HOSTNAME"
    OS_VERSION_KEY = "OS_VERSION"
    PYTHON_VERSION_KEY = "PYTHON_VERSION"
    SERVICE_NAME_KEY = "SERVICE_NAME"

    def __init__(self):
        self._started_at = datetime.datetime.now(tz=datetime.UTC).isoformat()
        self._started_ts = time.monotonic()

        metadata = {key: os.environ.get(key) for key in self.ENV_INFO_KEYS}
        metadata[self.HOSTNAME_KEY] = socket.gethostname()
        metadata[self.OS_VERSION_KEY] = platform.platform()
        metadata[self.PYTHON_VERSION_KEY] = platform.python_version()
        metadata[self.SERVICE_NAME_KEY] = metadata[self.SERVICE_NAME_KEY] or SERVICE_NAME
        self.metadata = {key.lower(): value for key, value in metadata.items()}

    def info(self):
        """
        Return metadata about the container and some basic stats
        """
        return {
            **self.metadata,
            "started": self._started_at,
            "uptime_seconds": round(time.monotonic() - self._started_ts, 3),
        }


metadata = MetadataManager()
