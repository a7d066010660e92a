"""
Phase Sequencer

Validates a requested phase change against the phase sequence and the
requirement table, gating on document completeness.

The sequencer is pure: it decides, the caller persists.
"""

import logging
from typing import Iterable, Optional

from app.domain.workflow.documents import describe_document, satisfied_types
from app.domain.workflow.interfaces import (
    ActivityEntry,
    ActivityType,
    DocumentRequirementDetail,
    PhaseChangeResult,
    RejectionReason,
)
from app.domain.workflow.phases import (
    PHASE_DESCRIPTIONS,
    PHASE_LABELS,
    Phase,
    try_parse_phase,
)
from app.domain.workflow.remediation import phase_change_description
from app.domain.workflow.requirements import RequirementTable

logger = logging.getLogger(__name__)


EXIT_GATE_DESCRIPTION = "{label} phase must be completed before proceeding"


class PhaseSequencer:
    """
    Decides whether a student (or one country track) may move phases.

    Usage:
        sequencer = PhaseSequencer()
        result = sequencer.request_phase_change(
            "DOCUMENT_COLLECTION", "UNIVERSITY_SHORTLISTING", documents
        )
        if result.accepted:
            ...
    """

    def __init__(self, requirements: Optional[RequirementTable] = None):
        self.requirements = requirements or RequirementTable.default()

    def request_phase_change(
        self,
        current_phase: Optional[str],
        target_phase: Optional[str],
        documents: Iterable,
        country: Optional[str] = None,
    ) -> PhaseChangeResult:
        """
        Validate ``current_phase -> target_phase``.

        Args:
            current_phase: Phase the track is in now
            target_phase: Requested phase
            documents: Objects exposing ``type`` and ``status``
            country: Country of the track, if country-scoped

        Returns:
            PhaseChangeResult, accepted or carrying the rejection reason
        """
        current = try_parse_phase(current_phase)
        target = try_parse_phase(target_phase)

        if current is None or target is None:
            logger.warning(
                f"Invalid phase change request: {current_phase!r} -> {target_phase!r}"
            )
            return PhaseChangeResult(
                accepted=False,
                reason=RejectionReason.INVALID_PHASE,
                target_phase=target_phase,
                target_phase_name=(
                    PHASE_LABELS[target] if target else (target_phase or "")
                ),
                phase_description=(
                    f"Invalid phase: {current_phase if current is None else target_phase}"
                ),
                country=country,
            )

        if current == target:
            return PhaseChangeResult(
                accepted=False,
                reason=RejectionReason.NO_CHANGE_REQUESTED,
                target_phase=target.value,
                target_phase_name=PHASE_LABELS[target],
                phase_description=f"Student is already in {PHASE_LABELS[target]}",
                country=country,
            )

        required = self.requirements.required_for(current, target, country)
        satisfied = satisfied_types(documents)
        missing = [doc_type for doc_type in required if doc_type not in satisfied]

        if missing:
            logger.info(
                f"Phase change {current.value} -> {target.value} blocked, "
                f"missing {len(missing)} documents"
            )
            return PhaseChangeResult(
                accepted=False,
                reason=RejectionReason.MISSING_REQUIRED_DOCUMENTS,
                target_phase=target.value,
                target_phase_name=PHASE_LABELS[target],
                phase_description=self._describe_block(current, target, missing, country),
                missing_documents=missing,
                document_details=[
                    DocumentRequirementDetail(type=t, description=describe_document(t))
                    for t in missing
                ],
                country=country,
            )

        activity = ActivityEntry(
            type=ActivityType.PHASE_CHANGE,
            description=phase_change_description(current.value, target.value),
            metadata={
                "previousPhase": current.value,
                "newPhase": target.value,
                "country": country,
            },
        )
        return PhaseChangeResult(
            accepted=True,
            new_phase=target.value,
            previous_phase=current.value,
            activity=activity,
            country=country,
        )

    def _describe_block(
        self,
        current: Phase,
        target: Phase,
        missing: list,
        country: Optional[str],
    ) -> str:
        exit_set = self.requirements.exit_for(current)
        if any(doc_type in exit_set for doc_type in missing):
            return EXIT_GATE_DESCRIPTION.format(label=PHASE_LABELS[current])

        if target in PHASE_DESCRIPTIONS:
            return PHASE_DESCRIPTIONS[target]
        if country:
            return f"Required documents for {country} {PHASE_LABELS[target]} phase"
        return ""
