"""
Account Service
Provisioning and lifecycle of the `users` row that backs every profile.

A new account touches three places in order: the auth user, the `users`
row, the role profile row. When a later step fails the earlier ones are
undone, newest first, before the error is raised.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from campus_erp.core.exceptions import DatabaseError, DuplicateRecordError, UpstreamError
from campus_erp.core.logging_config import logger
from campus_erp.services.base import SupabaseService


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AccountService(SupabaseService):
    """Service for auth user + users row management"""

    async def ensure_email_available(self, email: str) -> None:
        try:
            taken = await self._exists("users", email=email)
        except DatabaseError as exc:
            raise UpstreamError("Failed to check existing users", cause=exc) from exc
        if taken:
            raise DuplicateRecordError("Email already exists", field="email")

    async def provision(
        self,
        *,
        role: str,
        email: str,
        password: str,
        full_name: str,
        phone: Optional[str],
        profile_table: str,
        profile_fields: Dict[str, Any],
    ) -> Tuple[str, Dict[str, Any]]:
        """Create auth user, users row and profile row; returns (user_id, profile)"""
        try:
            auth_user = await self.db.create_auth_user(
                email, password, user_metadata={"full_name": full_name, "role": role}
            )
        except DatabaseError as exc:
            logger.log_error_with_context(exc, context="create auth user", exc_info=False, role=role)
            raise UpstreamError("Failed to create user account", cause=exc) from exc

        user_id = auth_user.get("id")
        if not user_id:
            raise UpstreamError("Failed to create user account")

        try:
            await self.db.table("users").insert({
                "id": user_id,
                "email": email,
                "full_name": full_name,
                "phone": phone,
                "role": role,
                "is_active": True,
            }).execute()
        except DatabaseError as exc:
            logger.log_error_with_context(exc, context="create users row", exc_info=False, user_id=user_id)
            await self._rollback(user_id, users_row=False)
            raise UpstreamError("Failed to create user profile", cause=exc) from exc

        try:
            profile = await (
                self.db.table(profile_table)
                .insert({"user_id": user_id, **profile_fields})
                .select()
                .single()
            )
        except DatabaseError as exc:
            logger.log_error_with_context(exc, context=f"create {role} profile", exc_info=False, user_id=user_id)
            await self._rollback(user_id, users_row=True)
            raise UpstreamError(f"Failed to create {role} profile", cause=exc) from exc

        logger.info(
            f"Provisioned {role} account {user_id}",
            extra={"event_type": "account_provisioned", "role": role, "account_id": user_id}
        )
        return user_id, profile

    async def _rollback(self, user_id: str, users_row: bool) -> None:
        """Best-effort compensation; failures are logged, the insert error is raised"""
        if users_row:
            try:
                await self.db.table("users").delete().eq("id", user_id).execute()
            except DatabaseError as exc:
                logger.log_error_with_context(exc, context="rollback users row", exc_info=False, user_id=user_id)
        try:
            await self.db.delete_auth_user(user_id)
        except DatabaseError as exc:
            logger.log_error_with_context(exc, context="rollback auth user", exc_info=False, user_id=user_id)

    async def update_user(self, user_id: str, changes: Dict[str, Any], resource: str) -> None:
        if not changes:
            return
        try:
            await self.db.table("users").update({**changes, "updated_at": utc_now()}).eq("id", user_id).execute()
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to update {resource.lower()}", cause=exc) from exc

    async def soft_delete_user(self, user_id: str, resource: str) -> None:
        """Deactivate instead of deleting so history stays intact"""
        try:
            await self.db.table("users").update({
                "is_active": False,
                "is_deleted": True,
                "deleted_at": utc_now(),
            }).eq("id", user_id).execute()
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to delete {resource.lower()}", cause=exc) from exc
