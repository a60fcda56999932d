"""
Monitoring and observability infrastructure.
"""

from sceau.infrastructure.monitoring import metrics
from sceau.infrastructure.monitoring.logger import (
    get_logger,
    set_request_id,
    setup_logging,
)

__all__ = [
    "metrics",
    "get_logger",
    "set_request_id",
    "setup_logging",
]
