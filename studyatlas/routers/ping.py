import logging

from fastapi import APIRouter
from sqlalchemy import text

from studyatlas.dependencies import RedisDep, SessionDep, SettingsDep

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/ping")
async def ping():
    return {"status": "ok", "message": "pong"}


@router.get("/health")
async def health_check(settings: SettingsDep, session: SessionDep, redis_client: RedisDep):
    """Report database and Redis reachability."""
    services = {}

    try:
        session.execute(text("SELECT 1"))
        services["database"] = {"status": "healthy"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        services["database"] = {"status": "unhealthy", "message": str(e)}

    try:
        await redis_client.ping()
        services["redis"] = {"status": "healthy"}
    except Exception as e:
        logger.error(f"Redis health check failed: {e}")
        services["redis"] = {"status": "unhealthy", "message": str(e)}

    overall = "ok" if all(s["status"] == "healthy" for s in services.values()) else "degraded"
    return {"status": overall, "version": settings.app_version, "services": services}
