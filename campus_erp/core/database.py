"""
Hosted database access.

The database lives behind Supabase: tables are reached through PostgREST
(`/rest/v1/<table>`) and auth users through the GoTrue admin API
(`/auth/v1/admin/users`). One `SupabaseClient` is built per process at
startup and shared by every request through the `get_db` dependency.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx
from fastapi import Request

from campus_erp.core.config import Settings, settings
from campus_erp.core.exceptions import DatabaseError
from campus_erp.core.logging_config import logger


# PostgREST error code for "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"
# Postgres "invalid text representation", e.g. a malformed uuid in a filter
INVALID_TEXT_CODE = "22P02"

OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"


@dataclass
class QueryResult:
    data: Any
    count: Optional[int] = None


def first_related(value: Any) -> Optional[Dict[str, Any]]:
    """
    Normalize an embedded one-to-one join result to a nullable single row.

    PostgREST returns an embedded resource as an object or as an array
    depending on how it infers the relationship, so callers never inspect
    the shape themselves: a mapping is returned as-is, a list yields its
    first element (or None when empty), None stays None.
    """
    if value is None:
        return None
    if isinstance(value, list):
        return value[0] if value else None
    if isinstance(value, dict):
        return value
    raise TypeError(f"Unexpected embedded resource type: {type(value).__name__}")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _parse_count(content_range: Optional[str]) -> Optional[int]:
    """Total row count from a `Content-Range: 0-19/57` header"""
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


class TableQuery:
    """
    Builder for one PostgREST request against a table.

    Usage:
        row = await db.table("users").select("id, email").eq("id", user_id).single()
        result = await db.table("batches").select("*").order("batch_year", desc=True).execute()
    """

    def __init__(self, client: "SupabaseClient", table: str):
        self._client = client
        self._table = table
        self._method = "GET"
        self._columns = "*"
        self._filters: List[Tuple[str, str]] = []
        self._order: List[str] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._payload: Any = None
        self._count: Optional[str] = None
        self._return_representation = False

    # ---- operations ----

    def select(self, columns: str = "*", count: Optional[str] = None) -> "TableQuery":
        self._columns = "".join(columns.split())
        if count:
            self._count = count
        if self._method != "GET":
            self._return_representation = True
        return self

    def insert(self, payload: Any) -> "TableQuery":
        self._method = "POST"
        self._payload = payload
        return self

    def update(self, payload: Dict[str, Any]) -> "TableQuery":
        self._method = "PATCH"
        self._payload = payload
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        return self

    # ---- filters & modifiers ----

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{_format_value(value)}"))
        return self

    def ilike(self, column: str, pattern: str) -> "TableQuery":
        self._filters.append((column, f"ilike.{pattern}"))
        return self

    def or_(self, expression: str) -> "TableQuery":
        self._filters.append(("or", f"({expression})"))
        return self

    def order(self, column: str, desc: bool = False) -> "TableQuery":
        self._order.append(f"{column}.{'desc' if desc else 'asc'}")
        return self

    def limit(self, count: int) -> "TableQuery":
        self._limit = count
        return self

    def range(self, start: int, end: int) -> "TableQuery":
        self._offset = start
        self._limit = end - start + 1
        return self

    # ---- execution ----

    def _build(self, object_mode: bool) -> Tuple[List[Tuple[str, str]], Dict[str, str]]:
        params = list(self._filters)
        if self._method == "GET" or self._return_representation:
            params.append(("select", self._columns))
        if self._order:
            params.append(("order", ",".join(self._order)))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        if self._offset:
            params.append(("offset", str(self._offset)))

        prefer = []
        if self._return_representation:
            prefer.append("return=representation")
        elif self._method != "GET":
            prefer.append("return=minimal")
        if self._count:
            prefer.append(f"count={self._count}")

        headers = {}
        if prefer:
            headers["Prefer"] = ",".join(prefer)
        if object_mode:
            headers["Accept"] = OBJECT_MEDIA_TYPE
        return params, headers

    async def _send(self, object_mode: bool = False) -> httpx.Response:
        params, headers = self._build(object_mode)
        return await self._client.request(
            self._method,
            f"/rest/v1/{self._table}",
            params=params,
            json=self._payload,
            headers=headers,
            table=self._table,
        )

    async def execute(self) -> QueryResult:
        """Run the request and return all rows plus the exact count when requested"""
        response = await self._send()
        data = response.json() if response.content else []
        return QueryResult(data=data, count=_parse_count(response.headers.get("content-range")))

    async def single(self) -> Dict[str, Any]:
        """Exactly one row, otherwise DatabaseError with code PGRST116"""
        response = await self._send(object_mode=True)
        return response.json()

    async def maybe_single(self) -> Optional[Dict[str, Any]]:
        """One row, or None when the filters match no single row"""
        try:
            return await self.single()
        except DatabaseError as exc:
            if exc.code == NO_ROWS_CODE:
                return None
            raise


def _error_from_response(response: httpx.Response) -> DatabaseError:
    """Map a PostgREST or GoTrue error body to DatabaseError"""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = (
        body.get("message")
        or body.get("msg")
        or body.get("error_description")
        or body.get("error")
        or response.text
        or f"HTTP {response.status_code}"
    )
    code = body.get("code") if isinstance(body.get("code"), str) else body.get("error_code")
    return DatabaseError(
        str(message),
        code=str(code) if code else None,
        details=body.get("details"),
        hint=body.get("hint"),
        http_status=response.status_code,
    )


def _row_count(response: httpx.Response) -> int:
    if not response.content:
        return 0
    try:
        body = response.json()
    except ValueError:
        return 0
    if isinstance(body, list):
        return len(body)
    return 1 if body else 0


class SupabaseClient:
    """Async client for the hosted database, shared across requests"""

    def __init__(
        self,
        url: str,
        service_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.is_configured = bool(url and service_key)
        if not self.is_configured:
            logger.warning(
                "Supabase credentials not configured. Database operations will fail. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in your .env file"
            )
        self._http = httpx.AsyncClient(
            base_url=self.url or "http://supabase.invalid",
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        config: Settings = settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "SupabaseClient":
        return cls(
            config.SUPABASE_URL,
            config.SUPABASE_SERVICE_ROLE_KEY,
            timeout=config.SUPABASE_TIMEOUT,
            transport=transport,
        )

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        table: Optional[str] = None,
    ) -> httpx.Response:
        if not self.is_configured:
            raise DatabaseError("Supabase not configured", code="NOT_CONFIGURED")

        start_time = time.perf_counter()
        try:
            response = await self._http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            raise DatabaseError(
                f"Hosted database request failed: {type(exc).__name__}: {exc}",
                code="NETWORK_ERROR",
            ) from exc

        duration_ms = (time.perf_counter() - start_time) * 1000
        if response.is_error:
            raise _error_from_response(response)

        logger.log_db_query(method, table or path, duration_ms, rows_affected=_row_count(response))
        return response

    # ---- GoTrue admin ----

    async def create_auth_user(
        self,
        email: str,
        password: str,
        user_metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Create a confirmed auth user and return it (at least its `id`)"""
        response = await self.request(
            "POST",
            "/auth/v1/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": user_metadata or {},
            },
            table="auth.users",
        )
        body = response.json()
        return body.get("user", body)

    async def delete_auth_user(self, user_id: str) -> None:
        await self.request("DELETE", f"/auth/v1/admin/users/{user_id}", table="auth.users")

    async def aclose(self) -> None:
        await self._http.aclose()


def get_db(request: Request) -> SupabaseClient:
    """Dependency returning the process-wide hosted database client"""
    return request.app.state.db
