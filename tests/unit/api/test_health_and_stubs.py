"""
API Tests for health, placeholder routes and cross-cutting response handling
"""
import pytest
from httpx import AsyncClient


class TestHealth:
    """Health endpoints of both services"""

    @pytest.mark.asyncio
    async def test_academic_health(self, academic_client: AsyncClient):
        response = await academic_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["service"] == "academic-backend"
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_admin_health(self, admin_client: AsyncClient):
        response = await admin_client.get("/health")

        assert response.json()["service"] == "admin-backend"


class TestPlaceholderRoutes:
    """Routes reserved for features that are not built yet"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,message", [
        ("/timetable/my", "Get my timetable - to be implemented"),
        ("/timetable/today", "Get today's schedule - to be implemented"),
        ("/timetable/class/C1", "Get class timetable - to be implemented"),
        ("/timetable/assigned-classes", "Get assigned classes - to be implemented"),
    ])
    async def test_timetable_placeholders(self, academic_client: AsyncClient, path, message):
        response = await academic_client.get(f"/api/academic/v1{path}")

        assert response.status_code == 200
        assert response.json() == {"message": message}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/attendance/my", "/marks/my", "/groups", "/notifications/unread-count"])
    async def test_other_academic_placeholders(self, academic_client: AsyncClient, path):
        response = await academic_client.get(f"/api/academic/v1{path}")

        assert response.status_code == 200
        assert response.json()["message"].endswith("to be implemented")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,message", [
        ("/auth/login", "Login endpoint - to be implemented"),
        ("/auth/logout", "Logout endpoint - to be implemented"),
        ("/auth/refresh", "Token refresh endpoint - to be implemented"),
    ])
    async def test_admin_auth_placeholders(self, admin_client: AsyncClient, path, message):
        response = await admin_client.post(f"/api/admin/v1{path}")

        assert response.status_code == 200
        assert response.json() == {"message": message}


class TestResponseHandling:
    """Envelope, headers and unknown routes"""

    @pytest.mark.asyncio
    async def test_unknown_route(self, academic_client: AsyncClient):
        response = await academic_client.get("/api/academic/v1/nowhere")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["message"] == "Route GET /api/academic/v1/nowhere not found"
        assert body["meta"]["path"] == "/api/academic/v1/nowhere"

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, admin_client: AsyncClient):
        response = await admin_client.patch("/api/admin/v1/students")

        assert response.status_code == 405
        assert response.json()["error"]["code"] == "HTTP_405"

    @pytest.mark.asyncio
    async def test_profile_routes_are_per_service(self, admin_client: AsyncClient):
        """Test the admin backend does not serve academic routes"""
        response = await admin_client.get("/api/academic/v1/student/profile", params={"user_id": "U1"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, academic_client: AsyncClient):
        response = await academic_client.get("/health")

        assert response.headers["X-Request-ID"]
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_request_id_is_propagated(self, academic_client: AsyncClient):
        response = await academic_client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_security_headers(self, academic_client: AsyncClient):
        response = await academic_client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"

    @pytest.mark.asyncio
    async def test_oversized_body(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/admin/v1/academic/batches",
            content=b"{}",
            headers={"Content-Type": "application/json", "Content-Length": str(20 * 1024 * 1024)},
        )

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"
