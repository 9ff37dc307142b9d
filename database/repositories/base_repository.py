"""
Base Repository Pattern
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import logging
from supabase import Client

from database.client import get_supabase
from core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseRepository:
    """Base repository with common database operations"""

    def __init__(self, table_name: str, db: Optional[Client] = None):
        """Initialize repository

        Args:
            table_name: Name of the database table
            db: Optional client; the shared Supabase client is used otherwise
        """
        self.table_name = table_name
        self.db: Client = db if db is not None else get_supabase()

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new record

        Args:
            data: Record data

        Returns:
            Created record
        """
        try:
            result = self.db.table(self.table_name).insert(data).execute()
        except Exception as e:
            logger.error(f"Create failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

        if not result.data:
            raise DatabaseError(f"Failed to create {self.table_name} record")

        return result.data[0]

    async def get_by_id(self, id: Any) -> Optional[Dict[str, Any]]:
        """Get record by ID

        Args:
            id: Record ID

        Returns:
            Record or None
        """
        return await self.get_one('id', id)

    async def get_one(self, column: str, value: Any) -> Optional[Dict[str, Any]]:
        """First record whose column equals value, or None"""
        try:
            result = self.db.table(self.table_name).select("*").eq(column, value).limit(1).execute()

            if result.data:
                return result.data[0]
            return None

        except Exception as e:
            logger.error(f"Get by {column} failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

    async def get_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        order_by: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Get all records with optional filtering

        Args:
            filters: Equality conditions
            limit: Maximum records to return
            order_by: Order by column, prefix with "-" for descending

        Returns:
            List of records
        """
        try:
            query = self.db.table(self.table_name).select("*")

            # Apply filters
            if filters:
                for key, value in filters.items():
                    query = query.eq(key, value)

            # Apply ordering
            if order_by:
                desc = order_by.startswith('-')
                column = order_by[1:] if desc else order_by
                query = query.order(column, desc=desc)

            if limit:
                query = query.limit(limit)

            result = query.execute()
            return result.data or []

        except Exception as e:
            logger.error(f"Get all failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

    async def update_where(
        self,
        column: str,
        value: Any,
        data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Update records matching column = value

        Returns:
            First updated record or None
        """
        try:
            result = self.db.table(self.table_name).update(data).eq(column, value).execute()

            if result.data:
                return result.data[0]
            return None

        except Exception as e:
            logger.error(f"Update failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

    async def upsert(self, data: Dict[str, Any], on_conflict: str) -> Dict[str, Any]:
        """Insert or replace a record keyed by a unique column

        Returns:
            Stored record
        """
        try:
            result = self.db.table(self.table_name).upsert(data, on_conflict=on_conflict).execute()
        except Exception as e:
            logger.error(f"Upsert failed in {self.table_name}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

        if not result.data:
            raise DatabaseError(f"Failed to store {self.table_name} record")

        return result.data[0]
