"""
Domain Repository
"""
from decimal import Decimal
from typing import Optional, List, Dict, Any, Sequence
import logging
import re

from supabase import Client

from config.constants import STORED_SEARCH_LIMIT
from core.exceptions import DatabaseError
from database.repositories.base_repository import BaseRepository, utc_now

logger = logging.getLogger(__name__)

# Characters that can appear in stored names and descriptions
_SEARCHABLE_TERM = re.compile(r"^[a-z0-9 .-]+$")


class DomainRepository(BaseRepository):
    """Repository for generated domain candidates"""

    def __init__(self, db: Optional[Client] = None):
        super().__init__("domains", db=db)

    async def save_domain(self, candidate: Dict[str, Any]) -> Dict[str, Any]:
        """Store a candidate, replacing any earlier row with the same name

        Args:
            candidate: Row data without id

        Returns:
            Stored row including its id
        """
        data = dict(candidate)
        data["length"] = len(data["name"])
        data.setdefault("checked_at", utc_now())

        return await self.upsert(data, on_conflict="name")

    async def get_domain(self, domain_id: int) -> Optional[Dict[str, Any]]:
        return await self.get_by_id(domain_id)

    async def get_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        return await self.get_one("name", name)

    async def update_availability(self, name: str, is_available: bool) -> Optional[Dict[str, Any]]:
        """Refresh availability of a stored row

        Returns:
            Updated row, or None when the name was never stored
        """
        updated = await self.update_where("name", name, {
            "is_available": is_available,
            "checked_at": utc_now()
        })

        if updated:
            logger.info(f"🔄 Updated availability for {name}: {is_available}")
        return updated


    async def search_domains(
        self,
        term: Optional[str] = None,
        extensions: Optional[Sequence[str]] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        available_only: bool = False,
        max_length: Optional[int] = None,
        limit: int = STORED_SEARCH_LIMIT
    ) -> List[Dict[str, Any]]:
        """
        Stored rows matching the filters, newest first

        Every filter runs in the database, so `limit` caps the matches rather
        than the rows scanned. The text term is pushed down as a
        case-insensitive match on name or description, or an exact tag; terms
        with characters outside names and descriptions are left to the caller.

        Args:
            term: Lowercase text to look for
            extensions: Allowed extensions
            min_price: Inclusive lower price bound
            max_price: Inclusive upper price bound
            available_only: Only rows marked available
            max_length: Maximum full name length
            limit: Maximum rows returned

        Returns:
            Matching rows
        """
        try:
            query = self.db.table(self.table_name).select("*")

            if available_only:
                query = query.eq("is_available", True)
            if extensions:
                query = query.in_("extension", list(extensions))
            if min_price is not None:
                query = query.gte("price", str(min_price))
            if max_price is not None:
                query = query.lte("price", str(max_price))
            if max_length is not None:
                query = query.lte("length", max_length)
            if term and _SEARCHABLE_TERM.match(term):
                query = query.or_(
                    f"name.ilike.%{term}%,description.ilike.%{term}%,tags.cs.{{{term}}}"
                )

            result = query.order("checked_at", desc=True).limit(limit).execute()
            return result.data or []

        except Exception as e:
            logger.error(f"Search failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")
