"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.db.store import ProgressStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    The progress store and engine config are injected.
    """

    store: ProgressStore
    config: EngineConfig = DEFAULT_ENGINE_CONFIG

    _progression_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def progression_service(self):
        """Get ProgressionService instance (lazy-loaded)"""
        if self._progression_service is None:
            from landlord.services.progression_service import ProgressionService
            self._progression_service = ProgressionService(self.store, self.config)
            logger.debug("ProgressionService instantiated")
        return self._progression_service


# Global container instance (initialized at application startup)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() at startup before using services."
        )
    return _container


def init_container(store: ProgressStore, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        store: Progress store instance
        config: Engine rules

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(store=store, config=config)
    logger.info("Service container initialized")
    return _container


def reset_container() -> None:
    """Drop the global container (used on shutdown and in tests)"""
    global _container
    _container = None
