"""
API Routes Package
"""
from fastapi import APIRouter

# Import all routers
from api.routes.domain_routes import router as domain_router
from api.routes.search_routes import router as search_router
from api.routes.health_routes import router as health_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(
    domain_router,
    prefix="/domains",
    tags=["domains"]
)

api_router.include_router(
    search_router,
    prefix="/searches",
    tags=["searches"]
)

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["health"]
)

__all__ = [
    "api_router",
    "domain_router",
    "search_router",
    "health_router"
]
