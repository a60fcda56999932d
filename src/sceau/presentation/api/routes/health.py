"""
Health check API routes.
"""

from fastapi import APIRouter, Response, status
from redis.exceptions import RedisError

from sceau import __version__
from sceau.di.container import get_container
from sceau.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(response: Response):
    """
    Health check endpoint.

    Returns 503 when the shared challenge store is unreachable.
    """
    container = get_container()
    settings = container.settings

    store = {"backend": "memory", "status": "healthy"}
    if settings.REDIS_ENABLED:
        store["backend"] = "redis"
        try:
            await container.redis_client.ping()
        except (RedisError, OSError) as e:
            logger.warning("Redis health check failed", extra={"error": str(e)})
            store["status"] = "unhealthy"

    healthy = store["status"] == "healthy"
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if healthy else "degraded",
        "version": __version__,
        "components": {
            "challenge_store": store,
            "revocation": "enabled" if settings.REVOCATION_ENABLED else "disabled",
            "address_validation": (
                "enabled" if settings.address_validation_enabled else "disabled"
            ),
        },
        "networks": container.network_registry.networks,
    }
