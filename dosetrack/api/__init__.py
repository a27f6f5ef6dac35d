# dosetrack/api/__init__.py
"""
Router principal de la API
"""
from fastapi import APIRouter

from dosetrack.core.config import get_settings
from . import medications, doses

settings = get_settings()

# Router principal de la API
api_router = APIRouter()

api_router.include_router(
    medications.router,
    prefix="/medications",
    tags=["medications"]
)

api_router.include_router(
    doses.router,
    prefix="/doses",
    tags=["doses"]
)


@api_router.get("/health")
def api_health():
    """Health check específico de la API"""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION
    }


@api_router.get("/info")
def api_info():
    """Información de la API"""
    return {
        "api": {
            "version": settings.VERSION,
            "timezone": settings.DEFAULT_TIMEZONE,
            "available_endpoints": [
                "/medications",
                "/medications/{id}",
                "/medications/{id}/adherence",
                "/medications/{id}/doses",
                "/doses"
            ]
        }
    }
