"""
Common plumbing for services backed by the hosted database
"""

from typing import Any, Dict

from campus_erp.core.database import INVALID_TEXT_CODE, NO_ROWS_CODE, SupabaseClient
from campus_erp.core.exceptions import DatabaseError, ResourceNotFoundError, UpstreamError


# A malformed id can never match a row, so it reads as "not found" too
MISSING_ROW_CODES = {NO_ROWS_CODE, INVALID_TEXT_CODE}


def is_missing_row(error: DatabaseError) -> bool:
    return error.code in MISSING_ROW_CODES


class SupabaseService:
    """Base class for services that take the shared client in `__init__`"""

    def __init__(self, db: SupabaseClient):
        self.db = db

    async def _get_or_404(
        self,
        table: str,
        row_id: str,
        resource: str,
        columns: str = "*",
    ) -> Dict[str, Any]:
        """Fetch one row by primary key, raising ResourceNotFoundError when absent"""
        try:
            return await self.db.table(table).select(columns).eq("id", row_id).single()
        except DatabaseError as exc:
            if is_missing_row(exc):
                raise ResourceNotFoundError(resource, row_id) from exc
            raise UpstreamError(f"Failed to fetch {resource.lower()}", cause=exc) from exc

    async def _exists(self, table: str, **filters: Any) -> bool:
        query = self.db.table(table).select("id")
        for column, value in filters.items():
            query = query.eq(column, value)
        result = await query.limit(1).execute()
        return bool(result.data)
