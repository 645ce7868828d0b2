"""
Cross-cutting helpers shared by every layer.
"""

from .logger import ContextLogger, configure_logging, get_logger

__all__ = [
    "ContextLogger",
    "configure_logging",
    "get_logger",
]
