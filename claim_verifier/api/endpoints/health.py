"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...infrastructure.dependencies import ServiceContainer, get_service_container

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    container: ServiceContainer = Depends(get_service_container),
) -> Dict[str, Any]:
    """Check the health of all service components.

    Returns:
        Availability of each evidence provider and result cache statistics
    """
    return {
        "status": "healthy",
        **container.provider_status(),
        "cache": container.get_result_cache().stats(),
    }
