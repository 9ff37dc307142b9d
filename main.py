"""
FastAPI Main Application Entry Point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
import uvicorn
import logging
from typing import Dict

from config.settings import settings
from config.logging_config import setup_logging
from core.catalog import get_extension_catalog
from core.registrars import get_pricing_aggregator
from database.client import init_supabase, close_supabase
from middleware import setup_middleware
from api.routes import api_router

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown
    """
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}")

    try:
        await init_supabase()

        # Static tables are built once and shared
        catalog = get_extension_catalog()
        get_pricing_aggregator()
        logger.info(f"✅ Extension catalog loaded ({len(catalog)} extensions)")

        if not settings.has_domain_api():
            logger.warning("⚠️ No domain API configured, availability relies on DNS probes and estimates")

        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}", exc_info=True)
        raise
    finally:
        logger.info("🛑 Shutting down...")
        await close_supabase()
        logger.info("✅ Cleanup complete")


def create_app() -> FastAPI:
    """Build the application with middleware and routes"""
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Domain name finder: keyword-driven candidates with availability and registrar pricing",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None
    )

    # Setup middleware (includes CORS, error handlers, rate limiting, etc.)
    setup_middleware(application)

    application.include_router(api_router, prefix="/api")

    @application.get("/")
    async def root() -> Dict:
        """Root endpoint"""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs" if settings.debug else "disabled"
        }

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )
