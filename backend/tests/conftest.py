"""
Test configuration and fixtures for the Application Phase Tracker.

Provides shared fixtures for unit and integration tests.
"""

import pytest
from typing import AsyncGenerator
from unittest.mock import MagicMock, AsyncMock
from uuid import uuid4

from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.domain.workflow.interfaces import ApplicationSnapshot, DocumentSnapshot


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from app.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Get synchronous test client."""
    return TestClient(app)


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def actor_id():
    return uuid4()


@pytest.fixture
def auth_headers(actor_id):
    """Development bearer header carrying the acting counselor id."""
    return {"Authorization": f"Bearer {actor_id}"}


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_tracking_service():
    """Mock for ApplicationTrackingService."""
    mock = MagicMock()
    mock.change_phase = AsyncMock()
    mock.reopen_phase = AsyncMock()
    mock.create_country_profile = AsyncMock()
    mock.list_country_profiles = AsyncMock(return_value=[])
    mock.update_application_status = AsyncMock()
    mock.activity_history = AsyncMock(return_value=[])
    mock.country_progress = AsyncMock(return_value=[])
    mock.multi_country_overview = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def override_tracking_service(app, mock_tracking_service):
    """Route requests to the mocked tracking service."""
    from app.api.dependencies import get_tracking_service

    async def _override():
        yield mock_tracking_service

    app.dependency_overrides[get_tracking_service] = _override
    return mock_tracking_service


# =============================================================================
# Sample Data Fixtures
# =============================================================================

CORE_TYPES = [
    "PASSPORT",
    "ACADEMIC_TRANSCRIPT",
    "RECOMMENDATION_LETTER",
    "STATEMENT_OF_PURPOSE",
    "CV_RESUME",
]


@pytest.fixture
def partial_documents():
    """Passport approved and transcript pending only."""
    return [
        DocumentSnapshot(type="PASSPORT", status="APPROVED"),
        DocumentSnapshot(type="ACADEMIC_TRANSCRIPT", status="PENDING"),
    ]


@pytest.fixture
def complete_documents():
    """All five core documents, mixed PENDING and APPROVED."""
    return [
        DocumentSnapshot(type=doc_type, status="APPROVED" if i % 2 else "PENDING")
        for i, doc_type in enumerate(CORE_TYPES)
    ]


@pytest.fixture
def uk_applications():
    return [
        ApplicationSnapshot(university_country="UK", application_status="SUBMITTED"),
        ApplicationSnapshot(university_country="Canada", application_status="ACCEPTED"),
    ]
