"""
Remediation and Notification Text

Turns structured workflow results into the counselor-facing text:
blocked phase change guidance, activity descriptions and the
phase-change notification line.
"""

from typing import Any, Dict, List, Optional, Union

from app.domain.workflow.documents import describe_document
from app.domain.workflow.interfaces import PhaseChangeResult
from app.domain.workflow.phases import phase_label


NEXT_STEPS: List[str] = [
    "Upload the missing documents in the Documents section",
    "Ensure documents are in PDF, JPG, or PNG format",
    "Wait for document approval (if applicable)",
    "Try changing the phase again",
]

HELP_LINE = "Need help? Contact your counselor for assistance."


def _spaced(value: Optional[str]) -> str:
    return (value or "").replace("_", " ")


def build_remediation_message(rejection: Union[PhaseChangeResult, Dict[str, Any]]) -> str:
    """
    Build the multi-line guidance shown when a phase change is blocked.

    Args:
        rejection: A rejected PhaseChangeResult, or its ``to_dict()`` form

    Returns:
        Heading, phase description, bulleted missing documents and the
        fixed next-steps list.
    """
    data = rejection.to_dict() if isinstance(rejection, PhaseChangeResult) else rejection

    label = data.get("targetPhaseName") or _spaced(data.get("targetPhase"))
    country = data.get("country")
    heading = f"Cannot proceed to {label} phase"
    if country:
        heading += f" ({country})"

    bullets = "\n".join(
        f"• {_spaced(doc_type)}: {describe_document(doc_type)}"
        for doc_type in data.get("missingDocuments", [])
    )
    steps = "\n".join(f"{i}. {step}" for i, step in enumerate(NEXT_STEPS, start=1))

    return (
        f"{heading}\n\n"
        f"{data.get('phaseDescription') or ''}\n\n"
        f" Missing Required Documents:\n{bullets}\n\n"
        f" Next Steps:\n{steps}\n\n"
        f"{HELP_LINE}"
    )


def phase_change_description(previous_phase: str, new_phase: str) -> str:
    """Activity-log description for a phase change."""
    return f"Student moved from {_spaced(previous_phase)} to {_spaced(new_phase)}"


def phase_reopen_description(phase: str, edits_left: int) -> str:
    return f"Phase {phase_label(phase)} reopened ({edits_left} edits left)"


def phase_change_notification(
    previous_phase: str,
    new_phase: str,
    country: Optional[str] = None,
    remarks: Optional[str] = None,
) -> str:
    """
    Notification text sent to the student after a phase change.

    Example:
        "[Canada] Application progress has been updated from Interview to
        Financial & TB Test. Remarks: medicals booked"
    """
    prefix = f"[{country}] " if country else ""
    message = (
        f"{prefix}Application progress has been updated from "
        f"{phase_label(previous_phase)} to {phase_label(new_phase)}."
    )
    if remarks:
        message += f" Remarks: {remarks}"
    return message
