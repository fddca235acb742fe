"""Infrastructure - logging."""

from packtrack.infra.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
