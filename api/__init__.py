"""API Package"""
from api.routes import (
    domain_routes,
    search_routes,
    health_routes
)

__all__ = [
    "domain_routes",
    "search_routes",
    "health_routes"
]
