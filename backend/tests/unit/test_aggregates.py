"""
Unit tests for per-country application aggregates.
"""

from decimal import Decimal
from types import SimpleNamespace

from app.domain.workflow.aggregates import ApplicationTotals, summarize_applications
from app.domain.workflow.interfaces import ApplicationSnapshot
from app.infrastructure.db.models import (
    ApplicationStatus,
    StudentCountryProfile,
    UniversityApplication,
)


def application(country, status, **extra):
    return UniversityApplication(
        student_id=extra.pop("student_id", None),
        university_name=extra.pop("university_name", "Somewhere University"),
        university_country=country,
        application_status=status,
        **extra,
    )


class TestSummarizeApplications:
    def test_counts_and_totals_for_one_country(self):
        applications = [
            application("UK", ApplicationStatus.SUBMITTED, is_primary_choice=True,
                        application_fee=Decimal("75.00")),
            application("United Kingdom", ApplicationStatus.CONDITIONAL_OFFER,
                        is_backup_choice=True, application_fee=Decimal("25.50"),
                        scholarship_amount=Decimal("1000.00")),
            application("U.K.", ApplicationStatus.REJECTED),
            application("Canada", ApplicationStatus.ACCEPTED,
                        application_fee=Decimal("999.00")),
        ]

        totals = summarize_applications(applications, "United Kingdom")

        assert totals.total_applications == 3
        assert totals.primary_applications == 1
        assert totals.backup_applications == 1
        assert totals.accepted_applications == 1
        assert totals.rejected_applications == 1
        assert totals.pending_applications == 1
        assert totals.total_application_fees == Decimal("100.50")
        assert totals.total_scholarship_amount == Decimal("1000.00")

    def test_deferred_and_waitlisted_only_counted_in_total(self):
        applications = [
            application("Malta", ApplicationStatus.DEFERRED),
            application("Malta", ApplicationStatus.WAITLISTED),
        ]

        totals = summarize_applications(applications, "malta")

        assert totals.total_applications == 2
        assert totals.accepted_applications == 0
        assert totals.pending_applications == 0
        assert totals.rejected_applications == 0

    def test_plain_snapshots_and_missing_amounts(self):
        applications = [
            ApplicationSnapshot(university_country="usa", application_status="UNDER_REVIEW"),
            SimpleNamespace(
                university_country="America",
                application_status="ACCEPTED",
                application_fee=None,
                scholarship_amount="",
            ),
        ]

        totals = summarize_applications(applications, "United States")

        assert totals.total_applications == 2
        assert totals.pending_applications == 1
        assert totals.accepted_applications == 1
        assert totals.total_application_fees == Decimal("0.00")

    def test_no_matching_applications(self):
        totals = summarize_applications([], "Germany")

        assert totals == ApplicationTotals()


class TestApplyTotals:
    def test_apply_to_profile(self):
        profile = StudentCountryProfile(country="Canada", current_phase="OFFER_RECEIVED")
        totals = ApplicationTotals(
            total_applications=2,
            accepted_applications=1,
            pending_applications=1,
            total_application_fees=Decimal("120.00"),
        )

        totals.apply_to(profile)

        assert profile.total_applications == 2
        assert profile.accepted_applications == 1
        assert profile.pending_applications == 1
        assert profile.total_application_fees == Decimal("120.00")
        assert profile.current_phase == "OFFER_RECEIVED"

    def test_to_dict(self):
        data = ApplicationTotals(total_applications=1, total_application_fees=Decimal("9.99")).to_dict()

        assert data["totalApplications"] == 1
        assert data["totalApplicationFees"] == "9.99"
        assert data["totalScholarshipAmount"] == "0.00"
