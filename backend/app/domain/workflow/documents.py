"""
Document Catalog

Document types and review statuses consumed by phase gating and progress.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Set


class DocumentType(str, Enum):
    """Every document type a counselor can collect."""
    PASSPORT = "PASSPORT"
    ACADEMIC_TRANSCRIPT = "ACADEMIC_TRANSCRIPT"
    RECOMMENDATION_LETTER = "RECOMMENDATION_LETTER"
    STATEMENT_OF_PURPOSE = "STATEMENT_OF_PURPOSE"
    ENGLISH_TEST_SCORE = "ENGLISH_TEST_SCORE"
    CV_RESUME = "CV_RESUME"
    FINANCIAL_STATEMENT = "FINANCIAL_STATEMENT"
    BIRTH_CERTIFICATE = "BIRTH_CERTIFICATE"
    MEDICAL_CERTIFICATE = "MEDICAL_CERTIFICATE"
    POLICE_CLEARANCE = "POLICE_CLEARANCE"
    BANK_STATEMENT = "BANK_STATEMENT"
    SPONSOR_LETTER = "SPONSOR_LETTER"
    ID_CARD = "ID_CARD"
    ENROLLMENT_LETTER = "ENROLLMENT_LETTER"
    OFFER_LETTER = "OFFER_LETTER"
    # Country-specific
    I_20_FORM = "I_20_FORM"
    SEVIS_FEE_RECEIPT = "SEVIS_FEE_RECEIPT"
    DS_160_CONFIRMATION = "DS_160_CONFIRMATION"
    VISA_APPOINTMENT_CONFIRMATION = "VISA_APPOINTMENT_CONFIRMATION"
    BANK_STATEMENTS = "BANK_STATEMENTS"
    SPONSOR_AFFIDAVIT = "SPONSOR_AFFIDAVIT"
    INCOME_PROOF = "INCOME_PROOF"
    TB_TEST_CERTIFICATE = "TB_TEST_CERTIFICATE"
    TUITION_FEE_RECEIPT = "TUITION_FEE_RECEIPT"
    BLOCKED_ACCOUNT_PROOF = "BLOCKED_ACCOUNT_PROOF"
    HEALTH_INSURANCE = "HEALTH_INSURANCE"
    APS_CERTIFICATE = "APS_CERTIFICATE"
    VISA_APPLICATION = "VISA_APPLICATION"
    BIOMETRICS = "BIOMETRICS"
    LOA = "LOA"
    GIC_CERTIFICATE = "GIC_CERTIFICATE"
    MEDICAL_EXAM = "MEDICAL_EXAM"
    OSHC = "OSHC"
    ECOE = "ECOE"
    FINANCIAL_PROOF = "FINANCIAL_PROOF"
    MEDICAL_INSURANCE = "MEDICAL_INSURANCE"
    CAMPUS_FRANCE_REGISTRATION = "CAMPUS_FRANCE_REGISTRATION"
    INTERVIEW_ACKNOWLEDGEMENT = "INTERVIEW_ACKNOWLEDGEMENT"
    OFII_FORM = "OFII_FORM"
    UNIVERSITALY_RECEIPT = "UNIVERSITALY_RECEIPT"
    ACCOMMODATION_PROOF = "ACCOMMODATION_PROOF"
    IPA_LETTER = "IPA_LETTER"
    MEDICAL_REPORT = "MEDICAL_REPORT"
    STUDENT_VISA_APPROVAL = "STUDENT_VISA_APPROVAL"
    MEDICAL_TEST = "MEDICAL_TEST"
    EMIRATES_ID_APPLICATION = "EMIRATES_ID_APPLICATION"
    OTHER = "OTHER"


class DocumentStatus(str, Enum):
    """Review status of an uploaded document."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    UNDER_REVIEW = "UNDER_REVIEW"


# Only these statuses count toward a requirement.
SATISFYING_STATUSES: FrozenSet[str] = frozenset({
    DocumentStatus.PENDING.value,
    DocumentStatus.APPROVED.value,
})

# Order matters: missing-document lists follow it.
CORE_DOCUMENTS = (
    DocumentType.PASSPORT.value,
    DocumentType.ACADEMIC_TRANSCRIPT.value,
    DocumentType.RECOMMENDATION_LETTER.value,
    DocumentType.STATEMENT_OF_PURPOSE.value,
    DocumentType.CV_RESUME.value,
)

DOCUMENT_DESCRIPTIONS: Dict[str, str] = {
    "PASSPORT": "Valid passport with at least 6 months validity",
    "ACADEMIC_TRANSCRIPT": "Official academic transcripts from previous institutions",
    "RECOMMENDATION_LETTER": "Recommendation letters from professors or employers",
    "STATEMENT_OF_PURPOSE": (
        "Statement of Purpose (SOP) explaining your academic and career goals"
    ),
    "CV_RESUME": "Updated CV or Resume highlighting your qualifications and experience",
    "ENGLISH_TEST_SCORE": "IELTS, TOEFL, or equivalent English proficiency test results",
    "FINANCIAL_STATEMENT": (
        "Bank statements showing sufficient funds for tuition and living expenses"
    ),
    "MEDICAL_CERTIFICATE": "Medical examination certificate and TB test results",
    "ID_CARD": "Student ID card (front and back if applicable)",
    "ENROLLMENT_LETTER": "Official enrollment/registration letter from the institution",
    "OFFER_LETTER": "Official offer letter issued by the university for this application",
}

DEFAULT_DOCUMENT_DESCRIPTION = "Required document"


def describe_document(document_type: str) -> str:
    return DOCUMENT_DESCRIPTIONS.get(document_type, DEFAULT_DOCUMENT_DESCRIPTION)


def is_satisfying(status: str) -> bool:
    """True if a document in ``status`` counts toward a requirement."""
    return (status or "").upper() in SATISFYING_STATUSES


def satisfied_types(documents: Iterable) -> Set[str]:
    """
    Document types present at least once with a satisfying status.

    Accepts any objects exposing ``type`` and ``status`` attributes
    (snapshots or ORM rows).
    """
    return {
        str(getattr(doc.type, "value", doc.type))
        for doc in documents
        if is_satisfying(str(getattr(doc.status, "value", doc.status)))
    }
