"""
Unit tests for the phase, progress and country profile routers.

The tracking service is replaced through dependency_overrides.
"""

from uuid import uuid4

from fastapi.testclient import TestClient

from app.domain.workflow.interfaces import ProgressReport
from app.domain.workflow.sequencer import PhaseSequencer
from app.infrastructure.db.models import StudentCountryProfile
from app.infrastructure.exceptions import (
    DuplicateError,
    InvalidPhaseError,
    MissingRequiredDocumentsError,
    NotFoundError,
    PhaseLockedError,
)


# ============================================================================
# Phase catalog
# ============================================================================

class TestPhaseCatalog:
    def test_lists_phases_in_order(self, client: TestClient):
        response = client.get("/api/phases")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 10
        assert data[0]["phase"] == "DOCUMENT_COLLECTION"
        assert data[0]["exit_requirements"][0] == "PASSPORT"
        assert data[-1]["label"] == "Enrollment"
        assert [p["index"] for p in data] == list(range(10))


# ============================================================================
# Phase change
# ============================================================================

class TestChangePhase:
    def test_requires_authorization(self, client, override_tracking_service):
        response = client.post(
            f"/api/students/{uuid4()}/phase",
            json={"target_phase": "INTERVIEW"},
        )

        assert response.status_code == 401
        override_tracking_service.change_phase.assert_not_awaited()

    def test_rejects_non_uuid_actor(self, client, override_tracking_service):
        response = client.post(
            f"/api/students/{uuid4()}/phase",
            json={"target_phase": "INTERVIEW"},
            headers={"Authorization": "Bearer not-a-uuid"},
        )

        assert response.status_code == 401

    def test_accepted(self, client, auth_headers, actor_id, override_tracking_service):
        student_id = uuid4()
        override_tracking_service.change_phase.return_value = {
            "accepted": True,
            "newPhase": "INTERVIEW",
            "previousPhase": "INITIAL_PAYMENT",
            "notification": "Application progress has been updated from Initial Payment to Interview.",
        }

        response = client.post(
            f"/api/students/{student_id}/phase",
            json={"target_phase": "INTERVIEW", "country": "UK", "remarks": "ok"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["newPhase"] == "INTERVIEW"
        override_tracking_service.change_phase.assert_awaited_once_with(
            student_id, "INTERVIEW", actor_id=actor_id, country="UK", remarks="ok"
        )

    def test_missing_documents_returns_structured_400(
        self, client, auth_headers, override_tracking_service, partial_documents
    ):
        rejection = PhaseSequencer().request_phase_change(
            "DOCUMENT_COLLECTION", "UNIVERSITY_SHORTLISTING", partial_documents
        )
        override_tracking_service.change_phase.side_effect = MissingRequiredDocumentsError(
            "Cannot proceed to University Shortlisting phase", rejection.to_dict()
        )

        response = client.post(
            f"/api/students/{uuid4()}/phase",
            json={"target_phase": "UNIVERSITY_SHORTLISTING"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["accepted"] is False
        assert data["missingDocuments"] == [
            "RECOMMENDATION_LETTER",
            "STATEMENT_OF_PURPOSE",
            "CV_RESUME",
        ]
        assert data["targetPhaseName"] == "University Shortlisting"
        assert data["message"].startswith("Cannot proceed")

    def test_invalid_phase_is_400(self, client, auth_headers, override_tracking_service):
        override_tracking_service.change_phase.side_effect = InvalidPhaseError("BOGUS")

        response = client.post(
            f"/api/students/{uuid4()}/phase",
            json={"target_phase": "BOGUS"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidPhaseError"

    def test_unknown_student_is_404(self, client, auth_headers, override_tracking_service):
        override_tracking_service.change_phase.side_effect = NotFoundError("Student not found")

        response = client.post(
            f"/api/students/{uuid4()}/phase",
            json={"target_phase": "INTERVIEW"},
            headers=auth_headers,
        )

        assert response.status_code == 404

    def test_empty_target_is_422(self, client, auth_headers, override_tracking_service):
        response = client.post(
            f"/api/students/{uuid4()}/phase",
            json={"target_phase": ""},
            headers=auth_headers,
        )

        assert response.status_code == 422


class TestReopen:
    def test_reopen(self, client, auth_headers, actor_id, override_tracking_service):
        student_id = uuid4()
        override_tracking_service.reopen_phase.return_value = {
            "currentPhase": "OFFER_RECEIVED",
            "editsLeft": 2,
        }

        response = client.post(
            f"/api/students/{student_id}/phase/reopen",
            json={"phase": "OFFER_RECEIVED", "country": "UK"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["editsLeft"] == 2
        override_tracking_service.reopen_phase.assert_awaited_once_with(
            student_id, "UK", "OFFER_RECEIVED", actor_id=actor_id
        )

    def test_locked_is_400(self, client, auth_headers, override_tracking_service):
        override_tracking_service.reopen_phase.side_effect = PhaseLockedError(
            "This phase is permanently locked. Maximum updates reached.",
            phase="OFFER_RECEIVED",
            status="Locked",
        )

        response = client.post(
            f"/api/students/{uuid4()}/phase/reopen",
            json={"phase": "OFFER_RECEIVED", "country": "UK"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["details"]["status"] == "Locked"


# ============================================================================
# Progress
# ============================================================================

class TestProgressRoutes:
    def test_student_progress(self, client, override_tracking_service):
        override_tracking_service.country_progress.return_value = [
            ProgressReport(
                country="United Kingdom",
                current_phase="APPLICATION_SUBMISSION",
                progress=30,
                phase_recognized=True,
                phase_label="Application Submission",
            )
        ]

        response = client.get(f"/api/students/{uuid4()}/progress")

        assert response.status_code == 200
        assert response.json()[0]["progress"] == 30

    def test_multi_country(self, client, override_tracking_service):
        override_tracking_service.multi_country_overview.return_value = [
            {"studentId": "abc", "countryCount": 2, "countries": []}
        ]

        response = client.get("/api/students/multi-country")

        assert response.status_code == 200
        assert response.json()[0]["countryCount"] == 2

    def test_preview(self, client):
        response = client.post("/api/progress/preview", json={
            "current_phase": "APPLICATION_SUBMISSION",
            "country": "UK",
            "applications": [
                {"university_country": "United Kingdom", "application_status": "SUBMITTED"},
            ],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["progress"] == 30
        assert data["country"] == "United Kingdom"
        assert data["phaseRecognized"] is True

    def test_preview_unknown_phase(self, client):
        response = client.post("/api/progress/preview", json={
            "current_phase": "UNKNOWN_PHASE_X",
            "country": "Canada",
        })

        assert response.json()["progress"] == 0
        assert response.json()["phaseRecognized"] is False


# ============================================================================
# Country profiles
# ============================================================================

class TestCountryProfiles:
    def test_create(self, client, auth_headers, override_tracking_service):
        student_id = uuid4()
        override_tracking_service.create_country_profile.return_value = StudentCountryProfile(
            id=uuid4(),
            student_id=student_id,
            country="United Kingdom",
            current_phase="DOCUMENT_COLLECTION",
        )

        response = client.post(
            f"/api/students/{student_id}/countries",
            json={"country": "uk"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["country"] == "United Kingdom"
        assert data["current_phase"] == "DOCUMENT_COLLECTION"
        assert data["visa_status"] == "NOT_STARTED"

    def test_duplicate_is_409(self, client, auth_headers, override_tracking_service):
        override_tracking_service.create_country_profile.side_effect = DuplicateError(
            "Student already has a United Kingdom track"
        )

        response = client.post(
            f"/api/students/{uuid4()}/countries",
            json={"country": "UK"},
            headers=auth_headers,
        )

        assert response.status_code == 409
