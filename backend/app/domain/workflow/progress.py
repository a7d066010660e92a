"""
Country Progress Calculator

Display-only 0-100 progress heuristic for one student-country track.

Each phase owns a 10-point band. Document collection fills its band
proportionally to the core documents present; the next three phases
score a milestone bonus when a matching application exists for the
country; the remaining phases sit at mid-band.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from app.domain.workflow.countries import normalize_country, same_country
from app.domain.workflow.documents import CORE_DOCUMENTS, satisfied_types
from app.domain.workflow.interfaces import ProgressReport
from app.domain.workflow.phases import PHASE_LABELS, Phase, phase_index, try_parse_phase


MAX_PROGRESS = 100
MIN_PROGRESS = 0
BAND_WIDTH = 10
MID_BAND = 5


def _attr(obj, name: str) -> str:
    value = getattr(obj, name, None)
    return str(getattr(value, "value", value) or "")


def _any_application(country: str, status: Optional[str] = None) -> Callable[[List], bool]:
    def check(applications: List) -> bool:
        for app in applications:
            if not same_country(_attr(app, "university_country"), country):
                continue
            if status is None or _attr(app, "application_status").upper() == status:
                return True
        return False
    return check


@dataclass(frozen=True)
class Milestone:
    """
    Intra-phase milestone scoring.

    Attributes:
        base: Points for reaching the phase
        reached_bonus: Added when the milestone is met
        pending_bonus: Added otherwise
        application_status: Status an application for the country must
            have; None means any application counts
    """
    base: int
    reached_bonus: int
    pending_bonus: int
    application_status: Optional[str] = None


# Phases not listed here score 10 * index + 5.
MILESTONES: Dict[Phase, Milestone] = {
    Phase.UNIVERSITY_SHORTLISTING: Milestone(base=10, reached_bonus=10, pending_bonus=5),
    Phase.APPLICATION_SUBMISSION: Milestone(
        base=20, reached_bonus=10, pending_bonus=5, application_status="SUBMITTED"
    ),
    Phase.OFFER_RECEIVED: Milestone(
        base=30, reached_bonus=10, pending_bonus=5, application_status="ACCEPTED"
    ),
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_progress(value: float) -> int:
    return max(MIN_PROGRESS, min(MAX_PROGRESS, round_half_up(value)))


class CountryProgressCalculator:
    """
    Pure progress computation; safe to call repeatedly and concurrently.

    Usage:
        calculator = CountryProgressCalculator()
        percent = calculator.compute_progress(profile, documents, applications)
    """

    def __init__(self, milestones: Optional[Dict[Phase, Milestone]] = None):
        self.milestones = milestones if milestones is not None else dict(MILESTONES)

    def compute_progress(
        self,
        profile,
        documents: Iterable,
        applications: Iterable,
    ) -> int:
        """
        Progress percentage for ``profile``.

        Args:
            profile: Object exposing ``current_phase`` and ``country``
            documents: All of the student's documents
            applications: All of the student's applications

        Returns:
            Integer in [0, 100]; 0 when the phase is absent or unrecognized
        """
        phase = try_parse_phase(_attr(profile, "current_phase"))
        if phase is None:
            return MIN_PROGRESS
        return clamp_progress(
            self._raw_progress(phase, profile, list(documents), list(applications))
        )

    def describe_progress(
        self,
        profile,
        documents: Iterable,
        applications: Iterable,
        visa_status: Optional[str] = None,
    ) -> ProgressReport:
        """Progress plus whether the stored phase was recognized at all."""
        raw_phase = _attr(profile, "current_phase") or None
        phase = try_parse_phase(raw_phase)
        return ProgressReport(
            country=normalize_country(_attr(profile, "country")),
            current_phase=raw_phase,
            progress=self.compute_progress(profile, documents, applications),
            phase_recognized=phase is not None,
            phase_label=PHASE_LABELS[phase] if phase else "",
            visa_status=visa_status,
        )

    def _raw_progress(
        self,
        phase: Phase,
        profile,
        documents: List,
        applications: List,
    ) -> float:
        if phase == Phase.DOCUMENT_COLLECTION:
            present = satisfied_types(documents)
            found = sum(1 for doc_type in CORE_DOCUMENTS if doc_type in present)
            return (found / len(CORE_DOCUMENTS)) * BAND_WIDTH

        milestone = self.milestones.get(phase)
        if milestone is None:
            return BAND_WIDTH * phase_index(phase) + MID_BAND

        country = _attr(profile, "country")
        reached = _any_application(country, milestone.application_status)(applications)
        return milestone.base + (milestone.reached_bonus if reached else milestone.pending_bonus)
