"""
Unit tests for table model details that the services rely on.
"""

from app.domain.workflow.interfaces import ActivityEntry, ActivityType
from app.infrastructure.db.models import Activity, CountryProfileRead


class TestActivityModel:
    def test_metadata_column_default_is_fresh_per_row(self):
        default = Activity.__table__.c["metadata"].default

        assert default.is_callable
        first = default.arg(None)
        second = default.arg(None)
        assert first == {}
        assert first is not second

    def test_from_entry_copies_metadata(self):
        metadata = {"newPhase": "INTERVIEW"}
        entry = ActivityEntry(
            type=ActivityType.PHASE_CHANGE,
            description="Student moved from OFFER RECEIVED to INTERVIEW",
            metadata=metadata,
        )

        activity = Activity.from_entry(entry, student_id=None, country="Malta")

        assert activity.type == "PHASE_CHANGE"
        assert activity.details == metadata
        assert activity.details is not metadata


class TestCountryProfileRead:
    def test_exposes_every_application_aggregate(self):
        fields = set(CountryProfileRead.model_fields)

        assert {
            "total_applications",
            "primary_applications",
            "backup_applications",
            "accepted_applications",
            "rejected_applications",
            "pending_applications",
            "total_application_fees",
            "total_scholarship_amount",
        } <= fields
