"""
Campus ERP - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from faker import Faker

# Set testing environment before the settings singleton is built
os.environ['ENVIRONMENT'] = 'test'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['SUPABASE_URL'] = ''
os.environ['SUPABASE_SERVICE_ROLE_KEY'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'

from campus_erp.main import admin_app, academic_app
from campus_erp.core.database import SupabaseClient, get_db
from tests.mocks.fake_supabase import FakeSupabase

fake = Faker()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Fresh in-memory hosted database for each test"""
    return FakeSupabase()


@pytest.fixture
async def db_client(fake_supabase: FakeSupabase) -> AsyncGenerator[SupabaseClient, None]:
    client = fake_supabase.client()
    yield client
    await client.aclose()


async def _client_for(app, db_client: SupabaseClient) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_db] = lambda: db_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def academic_client(db_client: SupabaseClient) -> AsyncGenerator[AsyncClient, None]:
    """Academic backend with the fake database injected"""
    async for ac in _client_for(academic_app, db_client):
        yield ac


@pytest.fixture
async def admin_client(db_client: SupabaseClient) -> AsyncGenerator[AsyncClient, None]:
    """Admin backend with the fake database injected"""
    async for ac in _client_for(admin_app, db_client):
        yield ac


@pytest.fixture
def student_payload() -> dict:
    return {
        'full_name': fake.name(),
        'email': fake.unique.email(),
        'phone': '9876543210',
        'roll_number': f"2024CSE{fake.unique.random_int(100, 999)}",
        'admission_year': 2024,
        'gender': 'female',
        'date_of_birth': '2006-05-14',
    }


@pytest.fixture
def professor_payload() -> dict:
    return {
        'full_name': f"Dr. {fake.name()}",
        'email': fake.unique.email(),
        'employee_id': f"EMP{fake.unique.random_int(1000, 9999)}",
        'designation': 'Assistant Professor',
        'qualification': 'PhD',
        'specialization': 'Distributed Systems',
        'joined_date': '2019-07-01',
    }
