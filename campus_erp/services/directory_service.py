"""
Directory Service
Admin list / get / update / soft-delete for people with a role profile
(students, professors). Subclasses say which profile table and columns.
"""

from typing import Any, Dict, List, Optional, Tuple

from campus_erp.core.database import SupabaseClient, first_related
from campus_erp.core.exceptions import DatabaseError, DuplicateRecordError, UpstreamError
from campus_erp.schemas.common import build_pagination
from campus_erp.services.account_service import AccountService
from campus_erp.services.base import SupabaseService


USER_FIELDS = ("full_name", "phone")


def search_pattern(term: str) -> str:
    """ilike pattern; characters with meaning inside or=(...) are dropped"""
    cleaned = "".join(ch for ch in term if ch not in ",()*%").strip()
    return f"*{cleaned}*"


class DirectoryService(SupabaseService):
    """Shared CRUD over `<role>_profiles` joined with `users`"""

    role: str = ""
    resource: str = ""
    profile_table: str = ""
    list_columns: str = "*"
    detail_columns: str = "*, users!inner(*), departments(*)"
    search_columns: Tuple[str, ...] = ()
    unique_column: str = ""
    unique_label: str = ""

    def __init__(self, db: SupabaseClient):
        super().__init__(db)
        self.accounts = AccountService(db)

    # ---- hooks ----

    def serialize_list_item(self, row: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def serialize_detail(self, row: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    # ---- queries ----

    async def list_page(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        status: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
        query = self.db.table(self.profile_table).select(self.list_columns, count="exact")

        if search and search.strip():
            pattern = search_pattern(search)
            query = query.or_(",".join(f"{column}.ilike.{pattern}" for column in self.search_columns))

        for column, value in (filters or {}).items():
            if value is not None:
                query = query.eq(column, value)

        if status == "active":
            query = query.eq("users.is_active", True)
        elif status == "inactive":
            query = query.eq("users.is_active", False)

        offset = (page - 1) * limit
        query = query.order("created_at", desc=True).range(offset, offset + limit - 1)

        try:
            result = await query.execute()
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to fetch {self.role}s", cause=exc) from exc

        items = [self.serialize_list_item(row) for row in result.data or []]
        return items, build_pagination(page, limit, result.count or 0)

    async def get(self, row_id: str) -> Dict[str, Any]:
        row = await self._get_or_404(self.profile_table, row_id, self.resource, self.detail_columns)
        return self.serialize_detail(row)

    async def ensure_unique_key(self, value: str) -> None:
        try:
            taken = await self._exists(self.profile_table, **{self.unique_column: value})
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to check existing {self.role}s", cause=exc) from exc
        if taken:
            raise DuplicateRecordError(f"{self.unique_label} already exists", field=self.unique_column)

    async def register(
        self,
        *,
        email: str,
        password: str,
        full_name: str,
        phone: Optional[str],
        unique_value: str,
        profile_fields: Dict[str, Any],
    ) -> Dict[str, Any]:
        await self.accounts.ensure_email_available(email)
        await self.ensure_unique_key(unique_value)

        user_id, profile = await self.accounts.provision(
            role=self.role,
            email=email,
            password=password,
            full_name=full_name,
            phone=phone,
            profile_table=self.profile_table,
            profile_fields={self.unique_column: unique_value, **profile_fields},
        )
        return {
            "id": profile.get("id"),
            "user_id": user_id,
            self.unique_column: unique_value,
            "full_name": full_name,
            "email": email,
            "password": password,
        }

    async def update(self, row_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        existing = await self._get_or_404(self.profile_table, row_id, self.resource, "user_id")

        user_changes = {key: changes[key] for key in USER_FIELDS if key in changes}
        if user_changes.get("full_name") is None:
            user_changes.pop("full_name", None)
        await self.accounts.update_user(existing["user_id"], user_changes, self.resource)

        profile_changes = {key: value for key, value in changes.items() if key not in USER_FIELDS}
        if not profile_changes:
            return await self._get_or_404(self.profile_table, row_id, self.resource)

        try:
            return await (
                self.db.table(self.profile_table)
                .update(profile_changes)
                .eq("id", row_id)
                .select()
                .single()
            )
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to update {self.role}", cause=exc) from exc

    async def soft_delete(self, row_id: str) -> None:
        existing = await self._get_or_404(self.profile_table, row_id, self.resource, "user_id")
        await self.accounts.soft_delete_user(existing["user_id"], self.resource)


def joined_user(row: Dict[str, Any]) -> Dict[str, Any]:
    return first_related(row.get("users")) or {}


def joined_department(row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return first_related(row.get("departments"))


def is_active(user: Dict[str, Any]) -> bool:
    return True if user.get("is_active") is None else user["is_active"]
