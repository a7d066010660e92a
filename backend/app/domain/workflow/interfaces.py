"""
Workflow Interfaces

Data contracts shared by the phase sequencer, progress calculator and
reopen policy. Inputs are plain snapshots so the rules never touch the
database; outputs are structured results the API serializes as-is.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RejectionReason(str, Enum):
    """Why a phase change was refused."""
    INVALID_PHASE = "INVALID_PHASE"
    NO_CHANGE_REQUESTED = "NO_CHANGE_REQUESTED"
    MISSING_REQUIRED_DOCUMENTS = "MISSING_REQUIRED_DOCUMENTS"


class PhaseStatus(str, Enum):
    """Per-phase bookkeeping status within one country track."""
    PENDING = "Pending"
    CURRENT = "Current"
    COMPLETED = "Completed"
    LOCKED = "Locked"


class ActivityType(str, Enum):
    """Activity-log entry kinds emitted by the workflow."""
    PHASE_CHANGE = "PHASE_CHANGE"
    PHASE_REOPEN = "PHASE_REOPEN"
    COUNTRY_PROFILE_CREATED = "COUNTRY_PROFILE_CREATED"
    APPLICATION_STATUS_CHANGE = "APPLICATION_STATUS_CHANGE"


@dataclass(frozen=True)
class DocumentSnapshot:
    """A student document as the rules see it."""
    type: str
    status: str


@dataclass(frozen=True)
class ApplicationSnapshot:
    """A university application as the rules see it."""
    university_country: Optional[str]
    application_status: str


@dataclass(frozen=True)
class ProfileSnapshot:
    """The phase slot of one student-country track."""
    current_phase: Optional[str]
    country: Optional[str] = None


@dataclass
class ActivityEntry:
    """Descriptor for an activity-log row; persisted by the caller."""
    type: ActivityType
    description: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "metadata": self.metadata,
        }


@dataclass
class DocumentRequirementDetail:
    type: str
    description: str


@dataclass
class PhaseChangeResult:
    """
    Outcome of a phase change request.

    Accepted results carry ``new_phase`` and the activity descriptor.
    Rejected results carry the reason and, for missing documents, the
    list consumers enumerate to build remediation guidance.
    """
    accepted: bool
    new_phase: Optional[str] = None
    previous_phase: Optional[str] = None
    activity: Optional[ActivityEntry] = None

    reason: Optional[RejectionReason] = None
    target_phase: Optional[str] = None
    target_phase_name: Optional[str] = None
    phase_description: str = ""
    missing_documents: List[str] = field(default_factory=list)
    document_details: List[DocumentRequirementDetail] = field(default_factory=list)
    country: Optional[str] = None

    @property
    def rejected(self) -> bool:
        return not self.accepted

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response format."""
        if self.accepted:
            return {
                "accepted": True,
                "newPhase": self.new_phase,
                "previousPhase": self.previous_phase,
                "activity": self.activity.to_dict() if self.activity else None,
            }
        return {
            "accepted": False,
            "reason": self.reason.value if self.reason else None,
            "targetPhase": self.target_phase,
            "targetPhaseName": self.target_phase_name,
            "phaseDescription": self.phase_description,
            "missingDocuments": list(self.missing_documents),
            "documentDetails": [
                {"type": d.type, "description": d.description}
                for d in self.document_details
            ],
            "country": self.country,
        }


@dataclass
class ProgressReport:
    """
    Display progress for one student-country track.

    ``phase_recognized`` separates "not started" (0, recognized) from
    unreadable phase data (0, not recognized).
    """
    country: str
    current_phase: Optional[str]
    progress: int
    phase_recognized: bool
    phase_label: str = ""
    visa_status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "currentPhase": self.current_phase,
            "phaseLabel": self.phase_label,
            "progress": self.progress,
            "phaseRecognized": self.phase_recognized,
            "visaStatus": self.visa_status,
        }


@dataclass
class PhaseMetadataState:
    """Mutable bookkeeping for one phase of one country track."""
    phase: str
    status: PhaseStatus = PhaseStatus.PENDING
    reopen_count: int = 0
    max_reopen_allowed: int = 2
    final_edit_allowed: bool = True

    @property
    def is_locked(self) -> bool:
        return self.status == PhaseStatus.LOCKED or not self.final_edit_allowed

    @property
    def edits_left(self) -> int:
        return max(0, self.max_reopen_allowed + 1 - self.reopen_count)


@dataclass
class ReopenDecision:
    """
    Outcome of a reopen request.

    ``updated`` holds the metadata to persist even on rejection, since a
    rejected attempt past the limit locks the phase.
    """
    allowed: bool
    phase: str
    message: str
    updated: Optional[PhaseMetadataState] = None
    reset_phases: List[str] = field(default_factory=list)
    activity: Optional[ActivityEntry] = None
    locked: bool = False
