"""Observability infrastructure module.

This module provides monitoring and error tracking:
- Structured logging with correlation IDs
- Prometheus metrics
- Bugsnag error reporting
"""

from line_slack_relay.platform.observability.logging import (
    configure_logging,
    correlation_id_ctx,
    get_logger,
)
from line_slack_relay.platform.observability.metrics import (
    BUCKETS,
    prometheus_middleware,
    record_inquiry_outcome,
    record_llm_tokens,
)

__all__ = [
    "BUCKETS",
    "configure_logging",
    "correlation_id_ctx",
    "get_logger",
    "prometheus_middleware",
    "record_inquiry_outcome",
    "record_llm_tokens",
]
