"""
kvfacade — Observability Module

Structured logging helpers.
"""

from .log_format import JSONFormatter, configure_logging

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
