# Application workflow rules: phases, gating, progress, reopening
from app.domain.workflow.interfaces import (
    ActivityEntry,
    ActivityType,
    ApplicationSnapshot,
    DocumentSnapshot,
    PhaseChangeResult,
    PhaseMetadataState,
    PhaseStatus,
    ProfileSnapshot,
    ProgressReport,
    RejectionReason,
    ReopenDecision,
)
from app.domain.workflow.phases import (
    PHASE_SEQUENCE,
    Phase,
    parse_phase,
    phase_label,
    try_parse_phase,
)
from app.domain.workflow.requirements import RequirementTable
from app.domain.workflow.sequencer import PhaseSequencer
from app.domain.workflow.progress import CountryProgressCalculator
from app.domain.workflow.reopen import PhaseReopenPolicy
from app.domain.workflow.countries import (
    country_key,
    normalize_country,
    students_with_multiple_countries,
)
from app.domain.workflow.remediation import (
    build_remediation_message,
    phase_change_notification,
)

__all__ = [
    "ActivityEntry",
    "ActivityType",
    "ApplicationSnapshot",
    "DocumentSnapshot",
    "PhaseChangeResult",
    "PhaseMetadataState",
    "PhaseStatus",
    "ProfileSnapshot",
    "ProgressReport",
    "RejectionReason",
    "ReopenDecision",
    "PHASE_SEQUENCE",
    "Phase",
    "parse_phase",
    "phase_label",
    "try_parse_phase",
    "RequirementTable",
    "PhaseSequencer",
    "CountryProgressCalculator",
    "PhaseReopenPolicy",
    "country_key",
    "normalize_country",
    "students_with_multiple_countries",
    "build_remediation_message",
    "phase_change_notification",
]
