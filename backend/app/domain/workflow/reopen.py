"""
Phase Reopen Policy

Controlled backward movement within one country track. A completed
phase may be reopened a limited number of times; the attempt after the
limit locks it for good.
"""

import logging
from dataclasses import replace
from typing import List

from app.domain.workflow.interfaces import (
    ActivityEntry,
    ActivityType,
    PhaseMetadataState,
    PhaseStatus,
    ReopenDecision,
)
from app.domain.workflow.phases import (
    PHASE_SEQUENCE,
    Phase,
    later_phases,
    parse_phase,
    phase_index,
)
from app.domain.workflow.remediation import phase_reopen_description
from app.infrastructure.exceptions import PhaseLockedError

logger = logging.getLogger(__name__)


DEFAULT_MAX_REOPENS = 2

LOCKED_MESSAGE = "This phase is permanently locked. Maximum updates reached."
LIMIT_REACHED_MESSAGE = (
    "Maximum reopen attempts reached. This phase is now permanently locked."
)
BACKWARD_ONLY_MESSAGE = (
    "Can only reopen previous phases. Use phase update to move forward."
)


class PhaseReopenPolicy:
    """Reopen rules and per-phase status bookkeeping."""

    def __init__(self, max_reopen_allowed: int = DEFAULT_MAX_REOPENS):
        self.max_reopen_allowed = max_reopen_allowed

    def initial_statuses(self, current_phase: str) -> List[PhaseMetadataState]:
        """
        Fresh metadata for every phase of a track sitting in ``current_phase``.

        Phases before it are Completed, it is Current, later ones Pending.
        """
        current_index = phase_index(parse_phase(current_phase))
        states = []
        for index, phase in enumerate(PHASE_SEQUENCE):
            if index < current_index:
                status = PhaseStatus.COMPLETED
            elif index == current_index:
                status = PhaseStatus.CURRENT
            else:
                status = PhaseStatus.PENDING
            states.append(PhaseMetadataState(
                phase=phase.value,
                status=status,
                max_reopen_allowed=self.max_reopen_allowed,
            ))
        return states

    @staticmethod
    def is_locked(metadata: PhaseMetadataState) -> bool:
        return metadata.is_locked

    def ensure_enterable(self, metadata: PhaseMetadataState) -> None:
        """
        Raises:
            PhaseLockedError: If a forward change targets a locked phase
        """
        if metadata.is_locked:
            raise PhaseLockedError(
                LOCKED_MESSAGE,
                phase=metadata.phase,
                status=metadata.status.value,
                reopen_count=metadata.reopen_count,
                max_reopen_allowed=metadata.max_reopen_allowed,
            )

    def reopen(
        self,
        current_phase: str,
        target_phase: str,
        metadata: PhaseMetadataState,
    ) -> ReopenDecision:
        """
        Decide a reopen request for ``target_phase``.

        Args:
            current_phase: Phase the track is in now
            target_phase: Phase to reopen
            metadata: Stored metadata of the target phase

        Returns:
            ReopenDecision. On the over-limit rejection ``updated`` holds the
            locked metadata the caller must persist.

        Raises:
            InvalidPhaseError: If either phase is not a sequence member
        """
        current = parse_phase(current_phase)
        target = parse_phase(target_phase)

        if metadata.status == PhaseStatus.LOCKED:
            return ReopenDecision(
                allowed=False, phase=target.value, message=LOCKED_MESSAGE, locked=True
            )

        if metadata.status == PhaseStatus.PENDING:
            return ReopenDecision(
                allowed=False,
                phase=target.value,
                message=(
                    f"Phase {target.value} has not been started yet. "
                    "Cannot reopen a phase that hasn't been completed."
                ),
            )

        if phase_index(target) >= phase_index(current):
            return ReopenDecision(
                allowed=False, phase=target.value, message=BACKWARD_ONLY_MESSAGE
            )

        if metadata.reopen_count >= metadata.max_reopen_allowed:
            logger.warning(
                f"Reopen limit reached for {target.value}, locking "
                f"({metadata.reopen_count}/{metadata.max_reopen_allowed})"
            )
            return ReopenDecision(
                allowed=False,
                phase=target.value,
                message=LIMIT_REACHED_MESSAGE,
                updated=replace(
                    metadata, status=PhaseStatus.LOCKED, final_edit_allowed=False
                ),
                locked=True,
            )

        new_count = metadata.reopen_count + 1
        is_final_edit = new_count > metadata.max_reopen_allowed
        updated = replace(
            metadata,
            status=PhaseStatus.CURRENT,
            reopen_count=new_count,
            final_edit_allowed=not is_final_edit,
        )
        reset = [phase.value for phase in later_phases(target)]

        return ReopenDecision(
            allowed=True,
            phase=target.value,
            message=f"Phase {target.value} reopened",
            updated=updated,
            reset_phases=reset,
            activity=ActivityEntry(
                type=ActivityType.PHASE_REOPEN,
                description=phase_reopen_description(target.value, updated.edits_left),
                metadata={
                    "previousPhase": current.value,
                    "reopenedPhase": target.value,
                    "reopenCount": new_count,
                    "editsLeft": updated.edits_left,
                },
            ),
        )

    def advance(
        self,
        states: List[PhaseMetadataState],
        previous_phase: Phase,
        new_phase: Phase,
    ) -> List[PhaseMetadataState]:
        """Mark ``previous_phase`` Completed and ``new_phase`` Current."""
        updated = []
        for state in states:
            if state.phase == previous_phase.value and not state.is_locked:
                updated.append(replace(state, status=PhaseStatus.COMPLETED))
            elif state.phase == new_phase.value:
                updated.append(replace(state, status=PhaseStatus.CURRENT))
            else:
                updated.append(state)
        return updated
