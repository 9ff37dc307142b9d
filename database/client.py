"""
Supabase Database Client
"""
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
import logging
from config.settings import settings

logger = logging.getLogger(__name__)

# Global client instance
_supabase_client: Optional[Client] = None


class SupabaseClient:
    """Singleton Supabase client wrapper"""

    @classmethod
    def get_client(cls) -> Client:
        """Get or create Supabase client instance"""
        global _supabase_client

        if _supabase_client is None:
            _supabase_client = cls._create_client()

        return _supabase_client

    @classmethod
    def _create_client(cls) -> Client:
        """Create new Supabase client"""
        try:
            # Use service key for server-side operations
            client = create_client(
                supabase_url=settings.supabase_url,
                supabase_key=settings.supabase_service_key,
                options=ClientOptions(
                    auto_refresh_token=False,
                    persist_session=False
                )
            )

            logger.info("✅ Supabase client created")
            return client

        except Exception as e:
            logger.error(f"❌ Failed to create Supabase client: {e}")
            raise

    @classmethod
    async def close(cls):
        """Drop the cached client"""
        global _supabase_client

        if _supabase_client:
            _supabase_client = None
            logger.info("✅ Supabase client closed")


async def check_connection(client: Optional[Client] = None) -> bool:
    """Run a trivial query against the domains table

    Returns:
        True when the store answered
    """
    try:
        client = client or SupabaseClient.get_client()
        client.table('domains').select("id").limit(1).execute()
        return True
    except Exception as e:
        logger.warning(f"⚠️ Supabase connection check failed: {e}")
        return False


async def init_supabase() -> Client:
    """Initialize Supabase connection"""
    client = SupabaseClient.get_client()

    if await check_connection(client):
        logger.info("✅ Supabase connection verified")
    else:
        logger.error("❌ Supabase connection test failed, requests will return 503 until it recovers")
    return client


async def close_supabase():
    """Close Supabase connection"""
    await SupabaseClient.close()


def get_supabase() -> Client:
    """
    Dependency to get Supabase client
    Use this in FastAPI dependency injection
    """
    return SupabaseClient.get_client()


# Exports
__all__ = [
    "init_supabase",
    "close_supabase",
    "check_connection",
    "get_supabase",
    "SupabaseClient"
]
