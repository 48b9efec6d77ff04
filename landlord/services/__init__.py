"""Application services wrapping the progression engine"""

from landlord.services.container import ServiceContainer, get_container, init_container
from landlord.services.progression_service import ProgressionService

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "ProgressionService",
]
