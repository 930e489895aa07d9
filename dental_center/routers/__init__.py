"""API router initializers."""

from fastapi import APIRouter


def get_api_router() -> APIRouter:
    """Construct and return the API router."""

    from dental_center.routers.auth import router as auth_router
    from dental_center.routers.dashboard import router as dashboard_router
    from dental_center.routers.incidents import router as incidents_router
    from dental_center.routers.patients import router as patients_router

    api_router = APIRouter()
    api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
    api_router.include_router(patients_router, prefix="/patients", tags=["patients"])
    api_router.include_router(incidents_router, prefix="/incidents", tags=["incidents"])
    api_router.include_router(dashboard_router, tags=["dashboard"])
    return api_router
