"""
Dependency container.

``get_container()`` returns the process-wide container: ``base`` holds the
shared notification publisher, ``scheduling`` builds per-session objects.
"""

import logging

from .base import BaseContainer
from .scheduling import SchedulingContainer

logger = logging.getLogger(__name__)


class DependencyContainer:
    def __init__(self, config: dict | None = None):
        self.base = BaseContainer(config)
        self.scheduling = SchedulingContainer(self.base)
        logger.debug("DependencyContainer initialized")

    @property
    def settings(self):
        return self.base.settings


_container: DependencyContainer | None = None


def get_container(config: dict | None = None) -> DependencyContainer:
    """Process-wide container; ``config`` only applies on the first call."""
    global _container
    if _container is None:
        _container = DependencyContainer(config)
    return _container


def reset_container() -> None:
    global _container
    _container = None


__all__ = [
    "BaseContainer",
    "DependencyContainer",
    "SchedulingContainer",
    "get_container",
    "reset_container",
]
