"""
Search Audit Repository
"""
from typing import Optional, List, Dict, Any

from supabase import Client

from config.constants import DEFAULT_RECENT_SEARCHES
from database.repositories.base_repository import BaseRepository, utc_now


class SearchRepository(BaseRepository):
    """Append-only log of generation requests"""

    def __init__(self, db: Optional[Client] = None):
        super().__init__("searches", db=db)

    async def create_search(
        self,
        query: str,
        filters: Dict[str, Any],
        results_count: int
    ) -> Dict[str, Any]:
        """Record one generation request

        Args:
            query: Raw query text
            filters: Filters as sent by the client (JSON-serializable)
            results_count: Number of candidates returned

        Returns:
            Stored search row
        """
        return await self.create({
            "query": query,
            "filters": filters,
            "results_count": results_count,
            "created_at": utc_now()
        })

    async def get_recent(self, limit: int = DEFAULT_RECENT_SEARCHES) -> List[Dict[str, Any]]:
        return await self.get_all(limit=limit, order_by="-created_at")
