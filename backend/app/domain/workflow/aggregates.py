"""
Country Application Aggregates

Per-country application counts and money totals carried on a country
profile. Recomputed from the student's applications whenever a track is
created or an application changes status.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable

from app.domain.workflow.countries import same_country


PENDING_APPLICATION_STATUSES = frozenset({"PENDING", "SUBMITTED", "UNDER_REVIEW"})
ACCEPTED_APPLICATION_STATUSES = frozenset({"ACCEPTED", "CONDITIONAL_OFFER"})
REJECTED_APPLICATION_STATUSES = frozenset({"REJECTED"})

_ZERO = Decimal("0.00")


def _status_value(status: Any) -> str:
    return str(getattr(status, "value", status) or "")


def _amount(value: Any) -> Decimal:
    if value is None or value == "":
        return _ZERO
    return Decimal(str(value))


@dataclass
class ApplicationTotals:
    """
    Aggregates of one student's applications to one country.

    Field names match the country profile columns they are written to.
    """
    total_applications: int = 0
    primary_applications: int = 0
    backup_applications: int = 0
    accepted_applications: int = 0
    rejected_applications: int = 0
    pending_applications: int = 0
    total_application_fees: Decimal = _ZERO
    total_scholarship_amount: Decimal = _ZERO

    def apply_to(self, profile: Any) -> Any:
        """Copy every total onto ``profile`` and return it."""
        for name, value in asdict(self).items():
            setattr(profile, name, value)
        return profile

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalApplications": self.total_applications,
            "primaryApplications": self.primary_applications,
            "backupApplications": self.backup_applications,
            "acceptedApplications": self.accepted_applications,
            "rejectedApplications": self.rejected_applications,
            "pendingApplications": self.pending_applications,
            "totalApplicationFees": str(self.total_application_fees),
            "totalScholarshipAmount": str(self.total_scholarship_amount),
        }


def summarize_applications(applications: Iterable[Any], country: str) -> ApplicationTotals:
    """
    Totals over the applications whose university country is ``country``.

    Country names are compared through their lookup key, so "UK" rows count
    towards a "United Kingdom" track. Conditional offers count as accepted.
    Missing fees and scholarship amounts count as zero.
    """
    totals = ApplicationTotals()
    for application in applications:
        if not same_country(getattr(application, "university_country", None), country):
            continue

        status = _status_value(getattr(application, "application_status", None))
        totals.total_applications += 1
        if getattr(application, "is_primary_choice", False):
            totals.primary_applications += 1
        if getattr(application, "is_backup_choice", False):
            totals.backup_applications += 1
        if status in ACCEPTED_APPLICATION_STATUSES:
            totals.accepted_applications += 1
        elif status in REJECTED_APPLICATION_STATUSES:
            totals.rejected_applications += 1
        elif status in PENDING_APPLICATION_STATUSES:
            totals.pending_applications += 1

        totals.total_application_fees += _amount(getattr(application, "application_fee", None))
        totals.total_scholarship_amount += _amount(
            getattr(application, "scholarship_amount", None)
        )
    return totals
