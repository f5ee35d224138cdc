"""
API Dependencies - Service container access for FastAPI endpoints

1. main_asyncio.py creates the ServiceContainer during startup
2. main_asyncio.py calls set_service_container()
3. Endpoints use get_service_container() / get_animation_service() via Depends()

Example:
    @router.get("/session")
    async def get_session(service: AnimationService = Depends(get_animation_service)):
        return SessionResponse.from_state(service.get_state())
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from services.animation_service import AnimationService
from services.service_container import ServiceContainer


# Set by main_asyncio.py (or tests) during initialization
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """Store (or clear, with None) the service container for API access"""
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        HTTPException: 503 Service Unavailable if services are not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Editor may still be starting."
        )
    return _service_container


async def get_animation_service(
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationService:
    return services.animation_service
