"""
API Tests for the admin student directory
"""
import pytest
from httpx import AsyncClient

from tests.factories import seed_directory_student
from tests.mocks.fake_supabase import FakeSupabase

STUDENTS_URL = "/api/admin/v1/students"


class TestCreateStudent:
    """Student registration"""

    @pytest.mark.asyncio
    async def test_create_student(self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload):
        """Test auth user, users row and profile are created"""
        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Student registered successfully"
        data = body["data"]
        assert data["roll_number"] == student_payload["roll_number"]
        assert data["email"] == student_payload["email"]
        assert data["password"] == f"Student@{student_payload['roll_number']}"

        assert len(fake_supabase.auth_users) == 1
        users = fake_supabase.rows("users", id=data["user_id"])
        assert len(users) == 1
        assert users[0]["role"] == "student"
        assert users[0]["is_active"] is True
        profile = fake_supabase.rows("student_profiles", user_id=data["user_id"])[0]
        assert profile["id"] == data["id"]
        assert profile["gender"] == "female"
        assert profile["admission_year"] == 2024

    @pytest.mark.asyncio
    async def test_create_with_explicit_password(self, admin_client: AsyncClient, student_payload):
        """Test a supplied password is kept"""
        student_payload["password"] = "Secret123"

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.json()["data"]["password"] == "Secret123"

    @pytest.mark.asyncio
    async def test_blank_optional_fields_are_ignored(
        self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload
    ):
        """Test empty strings from the form fall back to defaults"""
        student_payload.update({"password": "", "phone": "  ", "gender": "", "department_id": ""})

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["password"] == f"Student@{student_payload['roll_number']}"
        assert fake_supabase.rows("users", id=data["user_id"])[0]["phone"] is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload):
        """Test 400 when the email is taken"""
        fake_supabase.insert("users", email=student_payload["email"], role="student")

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "DUPLICATE_ENTRY"
        assert body["message"] == "Email already exists"
        assert fake_supabase.auth_users == {}

    @pytest.mark.asyncio
    async def test_duplicate_roll_number(self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload):
        """Test 400 when the roll number is taken"""
        seed_directory_student(fake_supabase, student_payload["roll_number"])

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Roll number already exists"
        assert fake_supabase.auth_users == {}

    @pytest.mark.asyncio
    async def test_profile_failure_rolls_back(self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload):
        """Test users row and auth user are removed when the profile insert fails"""
        fake_supabase.fail("student_profiles", "POST")

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to create student profile"
        assert fake_supabase.rows("users", email=student_payload["email"]) == []
        assert fake_supabase.auth_users == {}

    @pytest.mark.asyncio
    async def test_users_row_failure_rolls_back_auth_user(
        self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload
    ):
        """Test the auth user is removed when the users insert fails"""
        fake_supabase.fail("users", "POST")

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to create user profile"
        assert fake_supabase.auth_users == {}
        assert fake_supabase.tables["student_profiles"] == []

    @pytest.mark.asyncio
    async def test_auth_failure(self, admin_client: AsyncClient, fake_supabase: FakeSupabase, student_payload):
        """Test nothing is written when the auth user cannot be created"""
        fake_supabase.fail("auth.users", "POST")

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to create user account"
        assert fake_supabase.tables["users"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("full_name", "A"),
        ("email", "not-an-email"),
        ("admission_year", 1990),
        ("gender", "unknown"),
        ("department_id", "not-a-uuid"),
    ])
    async def test_validation_errors(self, admin_client: AsyncClient, student_payload, field, value):
        """Test invalid bodies are rejected with 400"""
        student_payload[field] = value

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["message"] == "Validation failed"
        assert any(field in error["loc"] for error in body["errors"])

    @pytest.mark.asyncio
    async def test_missing_required_field(self, admin_client: AsyncClient, student_payload):
        """Test roll_number is required"""
        del student_payload["roll_number"]

        response = await admin_client.post(STUDENTS_URL, json=student_payload)

        assert response.status_code == 400


class TestListStudents:
    """Paginated directory listing"""

    @pytest.mark.asyncio
    async def test_pagination(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test page size, totals and newest-first ordering"""
        for roll in ("2024CSE001", "2024CSE002", "2024CSE003"):
            seed_directory_student(fake_supabase, roll)

        response = await admin_client.get(STUDENTS_URL, params={"page": 1, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert [s["roll_number"] for s in body["data"]] == ["2024CSE003", "2024CSE002"]
        assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

        second = await admin_client.get(STUDENTS_URL, params={"page": 2, "limit": 2})
        assert [s["roll_number"] for s in second.json()["data"]] == ["2024CSE001"]

    @pytest.mark.asyncio
    async def test_list_item_shape(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test user fields are flattened into each item"""
        department = fake_supabase.insert("departments", department_name="Mechanical", department_code="ME")
        seed_directory_student(fake_supabase, "2024ME001", department_id=department["id"])

        response = await admin_client.get(STUDENTS_URL)

        item = response.json()["data"][0]
        assert item["full_name"] == "Student 2024ME001"
        assert item["email"] == "2024me001@campus.edu"
        assert item["phone"] is None
        assert item["department_name"] == "Mechanical"
        assert item["is_active"] is True

    @pytest.mark.asyncio
    async def test_empty_page(self, admin_client: AsyncClient):
        """Test an empty directory"""
        response = await admin_client.get(STUDENTS_URL)

        body = response.json()
        assert body["data"] == []
        assert body["pagination"]["total"] == 0
        assert body["pagination"]["totalPages"] == 0

    @pytest.mark.asyncio
    async def test_search(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test search matches roll and enrollment numbers case-insensitively"""
        seed_directory_student(fake_supabase, "2024CSE001")
        seed_directory_student(fake_supabase, "2024ECE001", enrollment_number="EN-CSE-MINOR")
        seed_directory_student(fake_supabase, "2024ME001")

        response = await admin_client.get(STUDENTS_URL, params={"search": "cse"})

        rolls = {s["roll_number"] for s in response.json()["data"]}
        assert rolls == {"2024CSE001", "2024ECE001"}

    @pytest.mark.asyncio
    async def test_filters(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test batch and status filters"""
        seed_directory_student(fake_supabase, "2023CSE001", admission_year=2023)
        seed_directory_student(fake_supabase, "2024CSE001")
        seed_directory_student(fake_supabase, "2024CSE002", is_active=False)

        by_batch = await admin_client.get(STUDENTS_URL, params={"batch": 2023})
        assert [s["roll_number"] for s in by_batch.json()["data"]] == ["2023CSE001"]

        inactive = await admin_client.get(STUDENTS_URL, params={"status": "inactive"})
        assert [s["roll_number"] for s in inactive.json()["data"]] == ["2024CSE002"]
        assert inactive.json()["pagination"]["total"] == 1

        active = await admin_client.get(STUDENTS_URL, params={"status": "active"})
        assert active.json()["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_invalid_query(self, admin_client: AsyncClient):
        """Test out-of-range paging and unknown status are rejected"""
        assert (await admin_client.get(STUDENTS_URL, params={"page": 0})).status_code == 400
        assert (await admin_client.get(STUDENTS_URL, params={"limit": 101})).status_code == 400
        assert (await admin_client.get(STUDENTS_URL, params={"status": "archived"})).status_code == 400

    @pytest.mark.asyncio
    async def test_list_failure(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test 500 when the listing query fails"""
        fake_supabase.fail("student_profiles")

        response = await admin_client.get(STUDENTS_URL)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch students"


class TestStudentDetail:
    """Get, update and delete"""

    @pytest.mark.asyncio
    async def test_get_student(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        student = seed_directory_student(fake_supabase, "2024CSE001", enrollment_number="EN1")

        response = await admin_client.get(f"{STUDENTS_URL}/{student['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == student["id"]
        assert data["roll_number"] == "2024CSE001"
        assert data["enrollment_number"] == "EN1"
        assert data["full_name"] == "Student 2024CSE001"
        assert data["department"] is None
        assert data["is_active"] is True

    @pytest.mark.asyncio
    async def test_get_unknown_student(self, admin_client: AsyncClient):
        response = await admin_client.get(f"{STUDENTS_URL}/missing-id")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "STUDENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_student(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test user and profile fields are written to their own tables"""
        student = seed_directory_student(fake_supabase, "2024CSE001")

        response = await admin_client.put(
            f"{STUDENTS_URL}/{student['id']}",
            json={"full_name": "Renamed Student", "enrollment_number": "EN42", "admission_year": 2025},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Student updated successfully"
        assert body["data"]["enrollment_number"] == "EN42"
        assert body["data"]["admission_year"] == 2025
        user = fake_supabase.rows("users", id=student["user_id"])[0]
        assert user["full_name"] == "Renamed Student"
        assert "updated_at" in user
        assert "full_name" not in fake_supabase.rows("student_profiles", id=student["id"])[0]

    @pytest.mark.asyncio
    async def test_update_only_user_fields(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test the stored profile is returned when no profile field changes"""
        student = seed_directory_student(fake_supabase, "2024CSE001")

        response = await admin_client.put(f"{STUDENTS_URL}/{student['id']}", json={"phone": "9111111111"})

        assert response.status_code == 200
        assert response.json()["data"]["roll_number"] == "2024CSE001"
        assert fake_supabase.rows("users", id=student["user_id"])[0]["phone"] == "9111111111"
        assert [r.method for r in fake_supabase.requests_to("student_profiles")] == ["GET", "GET"]

    @pytest.mark.asyncio
    async def test_update_blank_name_keeps_stored_name(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        student = seed_directory_student(fake_supabase, "2024CSE001")

        response = await admin_client.put(f"{STUDENTS_URL}/{student['id']}", json={"full_name": ""})

        assert response.status_code == 200
        assert fake_supabase.rows("users", id=student["user_id"])[0]["full_name"] == "Student 2024CSE001"

    @pytest.mark.asyncio
    async def test_update_unknown_student(self, admin_client: AsyncClient):
        response = await admin_client.put(f"{STUDENTS_URL}/missing-id", json={"phone": "9111111111"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_soft_delete(self, admin_client: AsyncClient, fake_supabase: FakeSupabase):
        """Test the user is deactivated and the profile kept"""
        student = seed_directory_student(fake_supabase, "2024CSE001")

        response = await admin_client.delete(f"{STUDENTS_URL}/{student['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Student deleted successfully"
        user = fake_supabase.rows("users", id=student["user_id"])[0]
        assert user["is_active"] is False
        assert user["is_deleted"] is True
        assert user["deleted_at"]
        assert fake_supabase.rows("student_profiles", id=student["id"])

        active = await admin_client.get(STUDENTS_URL, params={"status": "active"})
        assert active.json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete_unknown_student(self, admin_client: AsyncClient):
        response = await admin_client.delete(f"{STUDENTS_URL}/missing-id")

        assert response.status_code == 404
