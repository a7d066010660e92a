"""
Document Requirement Tables

Which document types must be present before a phase change is accepted.

Requirements come from two directions:
- exit requirements: documents needed to leave a phase
- entry requirements: documents needed to enter a phase

The default table only gates leaving document collection. The strict
entry table (with its country overrides) is opt-in via settings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from app.domain.workflow.countries import country_key
from app.domain.workflow.documents import CORE_DOCUMENTS, DocumentType
from app.domain.workflow.phases import Phase


# ============================================================================
# Rule tables
# ============================================================================

DEFAULT_EXIT_REQUIREMENTS: Dict[Phase, Tuple[str, ...]] = {
    Phase.DOCUMENT_COLLECTION: CORE_DOCUMENTS,
}

_IDENTITY = (DocumentType.PASSPORT.value, DocumentType.ACADEMIC_TRANSCRIPT.value)
_ENGLISH = _IDENTITY + (DocumentType.ENGLISH_TEST_SCORE.value,)
_FINANCIAL = _ENGLISH + (DocumentType.FINANCIAL_STATEMENT.value,)
_MEDICAL = _FINANCIAL + (DocumentType.MEDICAL_CERTIFICATE.value,)

STRICT_ENTRY_REQUIREMENTS: Dict[Phase, Tuple[str, ...]] = {
    Phase.UNIVERSITY_SHORTLISTING: _IDENTITY,
    Phase.APPLICATION_SUBMISSION: _ENGLISH,
    Phase.OFFER_RECEIVED: _ENGLISH,
    Phase.INITIAL_PAYMENT: _FINANCIAL,
    Phase.INTERVIEW: _FINANCIAL,
    Phase.FINANCIAL_TB_TEST: _MEDICAL,
    Phase.CAS_VISA: _MEDICAL,
    Phase.VISA_APPLICATION: _MEDICAL,
    Phase.ENROLLMENT: (
        DocumentType.ID_CARD.value,
        DocumentType.ENROLLMENT_LETTER.value,
    ),
}

# Keyed by country lookup key. Replaces the strict entry set for that phase.
COUNTRY_ENTRY_OVERRIDES: Dict[str, Dict[Phase, Tuple[str, ...]]] = {
    "uk": {
        Phase.VISA_APPLICATION: (
            DocumentType.TB_TEST_CERTIFICATE.value,
            DocumentType.BANK_STATEMENTS.value,
            DocumentType.TUITION_FEE_RECEIPT.value,
        ),
    },
    "usa": {
        Phase.OFFER_RECEIVED: (DocumentType.I_20_FORM.value,),
    },
    "canada": {
        Phase.INITIAL_PAYMENT: (DocumentType.TUITION_FEE_RECEIPT.value,),
    },
    "malta": {
        Phase.INITIAL_PAYMENT: (DocumentType.TUITION_FEE_RECEIPT.value,),
    },
}


def _merge(*groups: Sequence[str]) -> List[str]:
    """Concatenate requirement groups, dropping repeats, keeping order."""
    merged: List[str] = []
    for group in groups:
        for doc_type in group:
            if doc_type not in merged:
                merged.append(doc_type)
    return merged


@dataclass
class RequirementTable:
    """
    Inspectable requirement lookup.

    Attributes:
        exit_requirements: Documents needed to leave a phase
        entry_requirements: Documents needed to enter a phase
        country_overrides: Per-country replacement entry sets
    """
    exit_requirements: Dict[Phase, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_EXIT_REQUIREMENTS)
    )
    entry_requirements: Dict[Phase, Tuple[str, ...]] = field(default_factory=dict)
    country_overrides: Dict[str, Dict[Phase, Tuple[str, ...]]] = field(
        default_factory=dict
    )

    @classmethod
    def default(cls) -> "RequirementTable":
        return cls()

    @classmethod
    def strict(cls) -> "RequirementTable":
        """Exit gate plus the per-phase entry table and country overrides."""
        return cls(
            entry_requirements=dict(STRICT_ENTRY_REQUIREMENTS),
            country_overrides={k: dict(v) for k, v in COUNTRY_ENTRY_OVERRIDES.items()},
        )

    @classmethod
    def from_settings(cls, enforce_entry_documents: bool) -> "RequirementTable":
        return cls.strict() if enforce_entry_documents else cls.default()

    def entry_for(self, phase: Phase, country: Optional[str] = None) -> Tuple[str, ...]:
        """Entry set for ``phase``, with the country override when one exists."""
        key = country_key(country)
        if key:
            override = self.country_overrides.get(key, {}).get(phase)
            if override:
                return override
        return self.entry_requirements.get(phase, ())

    def exit_for(self, phase: Phase) -> Tuple[str, ...]:
        return self.exit_requirements.get(phase, ())

    def required_for(
        self,
        current: Phase,
        target: Phase,
        country: Optional[str] = None,
    ) -> List[str]:
        """
        Ordered, de-duplicated document types required for ``current -> target``.

        Exit requirements of the current phase come first.
        """
        return _merge(self.exit_for(current), self.entry_for(target, country))

