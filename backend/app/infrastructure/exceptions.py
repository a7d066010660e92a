"""
Custom Exceptions for the Application Phase Tracker

Hierarchical exception classes for proper error handling across layers.
"""

from typing import Optional, Dict, Any, List


class PhaseTrackerError(Exception):
    """Base exception for all phase tracker errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ValidationError(PhaseTrackerError):
    """Raised when input validation fails."""
    pass


class InvalidPhaseError(ValidationError):
    """Raised when a phase string is not a member of the phase sequence."""

    def __init__(self, phase: Optional[str], original_error: Optional[Exception] = None):
        super().__init__(
            f"Invalid phase: {phase!r}",
            details={"phase": phase},
            original_error=original_error,
        )
        self.phase = phase


class NoChangeRequestedError(ValidationError):
    """Raised when the target phase equals the current phase."""

    def __init__(self, phase: str):
        super().__init__(
            f"Student is already in phase {phase}",
            details={"phase": phase},
        )


class MissingRequiredDocumentsError(ValidationError):
    """
    Raised when a phase change is blocked by missing documents.

    Carries the structured rejection so API consumers can enumerate
    the missing documents instead of parsing the message.
    """

    def __init__(self, message: str, rejection: Dict[str, Any]):
        super().__init__(message, details=rejection)
        self.rejection = rejection

    @property
    def missing_documents(self) -> List[str]:
        return list(self.rejection.get("missingDocuments", []))


class PhaseReopenError(ValidationError):
    """Raised when a phase cannot be reopened."""

    def __init__(
        self,
        message: str,
        phase: Optional[str] = None,
        status: Optional[str] = None,
        reopen_count: Optional[int] = None,
        max_reopen_allowed: Optional[int] = None,
    ):
        details: Dict[str, Any] = {}
        if phase:
            details["phaseName"] = phase
        if status:
            details["status"] = status
        if reopen_count is not None:
            details["reopenCount"] = reopen_count
        if max_reopen_allowed is not None:
            details["maxReopenAllowed"] = max_reopen_allowed
        super().__init__(message, details)


class PhaseLockedError(PhaseReopenError):
    """Raised when a permanently locked phase is targeted."""
    pass


class DatabaseError(PhaseTrackerError):
    """Raised when database operations fail."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table
        super().__init__(message, details, original_error)


class NotFoundError(DatabaseError):
    """Raised when a requested resource is not found."""
    pass


class DuplicateError(DatabaseError):
    """Raised when attempting to create a duplicate resource."""
    pass


class ConfigurationError(PhaseTrackerError):
    """Raised when configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if missing_keys:
            details["missing_keys"] = missing_keys
        super().__init__(message, details, original_error)
