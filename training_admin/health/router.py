"""Health check endpoints."""

from fastapi import APIRouter, Request

from training_admin.auth.dependencies import SettingsDep


router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness check: the application is running."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness(request: Request, settings: SettingsDep) -> dict[str, str | bool]:
    """Readiness check: the state document must be loaded."""
    data_store = getattr(request.app.state, "data_store", None)
    loaded = data_store is not None and data_store.is_loaded
    return {
        "status": "ready" if loaded else "starting",
        "environment": settings.environment,
        "storage_backend": settings.storage_backend,
        "state_loaded": loaded,
    }


@router.get("")
async def health(settings: SettingsDep) -> dict[str, str]:
    """General health check endpoint."""
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }
