"""
Application Phases

The canonical, ordered list of phases a student's application to one
country moves through. Position in the sequence defines the progress band.
"""

from enum import Enum
from typing import Dict, List, Optional

from app.infrastructure.exceptions import InvalidPhaseError


class Phase(str, Enum):
    """Application phases, declared in sequence order."""
    DOCUMENT_COLLECTION = "DOCUMENT_COLLECTION"
    UNIVERSITY_SHORTLISTING = "UNIVERSITY_SHORTLISTING"
    APPLICATION_SUBMISSION = "APPLICATION_SUBMISSION"
    OFFER_RECEIVED = "OFFER_RECEIVED"
    INITIAL_PAYMENT = "INITIAL_PAYMENT"
    INTERVIEW = "INTERVIEW"
    FINANCIAL_TB_TEST = "FINANCIAL_TB_TEST"
    CAS_VISA = "CAS_VISA"
    VISA_APPLICATION = "VISA_APPLICATION"
    ENROLLMENT = "ENROLLMENT"


PHASE_SEQUENCE: List[Phase] = list(Phase)

FIRST_PHASE = PHASE_SEQUENCE[0]

PHASE_LABELS: Dict[Phase, str] = {
    Phase.DOCUMENT_COLLECTION: "Document Collection",
    Phase.UNIVERSITY_SHORTLISTING: "University Shortlisting",
    Phase.APPLICATION_SUBMISSION: "Application Submission",
    Phase.OFFER_RECEIVED: "Offer Received",
    Phase.INITIAL_PAYMENT: "Initial Payment",
    Phase.INTERVIEW: "Interview",
    Phase.FINANCIAL_TB_TEST: "Financial & TB Test",
    Phase.CAS_VISA: "CAS & Visa",
    Phase.VISA_APPLICATION: "Visa Process",
    Phase.ENROLLMENT: "Enrollment",
}

# Shown to counselors when a phase change is blocked.
PHASE_DESCRIPTIONS: Dict[Phase, str] = {
    Phase.UNIVERSITY_SHORTLISTING: (
        "To proceed with university selection, we need basic identification "
        "and academic records."
    ),
    Phase.APPLICATION_SUBMISSION: (
        "For university applications, English proficiency proof is required."
    ),
    Phase.INITIAL_PAYMENT: (
        "Before making payments, financial documentation is required to verify funding."
    ),
    Phase.INTERVIEW: (
        "Interview preparation requires all previous documents plus financial verification."
    ),
    Phase.FINANCIAL_TB_TEST: (
        "Visa preparation requires medical examination and TB test results."
    ),
    Phase.CAS_VISA: (
        "CAS and visa processing requires complete medical and financial documentation."
    ),
    Phase.VISA_APPLICATION: (
        "Visa Process requires all supporting documents including medical certificates."
    ),
    Phase.ENROLLMENT: (
        "Final enrollment requires student ID card and enrollment letter."
    ),
}


def try_parse_phase(value: Optional[str]) -> Optional[Phase]:
    """Return the Phase for ``value`` or None if it is not a sequence member."""
    if isinstance(value, Phase):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Phase(value.strip())
    except ValueError:
        return None


def parse_phase(value: Optional[str]) -> Phase:
    """
    Parse a phase string strictly.

    Raises:
        InvalidPhaseError: If ``value`` is not a sequence member.
    """
    phase = try_parse_phase(value)
    if phase is None:
        raise InvalidPhaseError(value)
    return phase


def phase_index(phase: Phase) -> int:
    """0-based position of ``phase`` in the sequence."""
    return PHASE_SEQUENCE.index(phase)


def next_phase(phase: Phase) -> Optional[Phase]:
    """Phase following ``phase``, or None for the last phase."""
    index = phase_index(phase)
    if index + 1 >= len(PHASE_SEQUENCE):
        return None
    return PHASE_SEQUENCE[index + 1]


def previous_phases(phase: Phase) -> List[Phase]:
    return PHASE_SEQUENCE[:phase_index(phase)]


def later_phases(phase: Phase) -> List[Phase]:
    return PHASE_SEQUENCE[phase_index(phase) + 1:]


def phase_label(value: str) -> str:
    """
    Human label for a phase.

    Unknown phase keys fall back to the key with underscores replaced,
    which is how country-specific steps are displayed.
    """
    phase = try_parse_phase(value)
    if phase is not None:
        return PHASE_LABELS[phase]
    return (value or "").replace("_", " ")
