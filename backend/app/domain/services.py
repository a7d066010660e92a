"""
Application Tracking Service

Orchestrates the workflow rules against persistence: loads a consistent
snapshot in one session, asks the sequencer / reopen policy / progress
calculator, then writes the outcome and its activity-log entry.

Country-scoped requests read and write the country profile phase; requests
without a country read and write the student's global phase slot. The two
slots are never synchronized.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import Settings, get_settings
from app.domain.workflow.aggregates import summarize_applications
from app.domain.workflow.countries import (
    country_key,
    normalize_country,
    students_with_multiple_countries,
)
from app.domain.workflow.interfaces import (
    ActivityEntry,
    ActivityType,
    PhaseStatus,
    ProgressReport,
    RejectionReason,
)
from app.domain.workflow.phases import FIRST_PHASE, parse_phase, try_parse_phase
from app.domain.workflow.progress import CountryProgressCalculator
from app.domain.workflow.remediation import (
    build_remediation_message,
    phase_change_notification,
)
from app.domain.workflow.reopen import PhaseReopenPolicy
from app.domain.workflow.requirements import RequirementTable
from app.domain.workflow.sequencer import PhaseSequencer
from app.infrastructure.db.models.activity import Activity
from app.infrastructure.db.models.country_profile import (
    CountryProfileCreate,
    StudentCountryProfile,
)
from app.infrastructure.db.models.university_application import (
    ApplicationStatus,
    UniversityApplication,
)
from app.infrastructure.db.repositories import (
    ActivityRepository,
    ApplicationRepository,
    CountryProfileRepository,
    DocumentRepository,
    PhaseMetadataRepository,
    StudentRepository,
)
from app.infrastructure.exceptions import (
    DuplicateError,
    InvalidPhaseError,
    MissingRequiredDocumentsError,
    NoChangeRequestedError,
    NotFoundError,
    PhaseLockedError,
    PhaseReopenError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ApplicationTrackingService:
    """
    Phase changes, reopens, country tracks and progress for students.

    One instance per session; every method runs inside the session's
    transaction, which the caller commits.
    """

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or get_settings()

        self.students = StudentRepository(session)
        self.profiles = CountryProfileRepository(session)
        self.documents = DocumentRepository(session)
        self.applications = ApplicationRepository(session)
        self.phase_metadata = PhaseMetadataRepository(session)
        self.activities = ActivityRepository(session)

        self.sequencer = PhaseSequencer(
            RequirementTable.from_settings(self.settings.enforce_entry_documents)
        )
        self.calculator = CountryProgressCalculator()
        self.reopen_policy = PhaseReopenPolicy(self.settings.max_phase_reopens)

    # ========================================================================
    # Lookups
    # ========================================================================

    async def _require_student(self, student_id: UUID, for_update: bool = False):
        if for_update:
            student = await self.students.get_for_update(student_id)
        else:
            student = await self.students.get_by_id(student_id)
        if not student:
            raise NotFoundError(
                f"Student {student_id} not found",
                operation="select",
                table="students",
            )
        return student

    async def _require_profile(
        self,
        student_id: UUID,
        country: str,
        for_update: bool = False,
    ) -> StudentCountryProfile:
        profile = await self.profiles.get_by_student_and_country(
            student_id, country, for_update=for_update
        )
        if not profile:
            raise NotFoundError(
                f"No {normalize_country(country)} track for student {student_id}",
                operation="select",
                table="student_country_profiles",
            )
        return profile

    async def _track_states(self, student_id: UUID, profile: StudentCountryProfile):
        """Metadata states of a track, seeding them when none exist yet."""
        rows = await self.phase_metadata.get_for_track(student_id, profile.country)
        if rows:
            return {name: row.to_state() for name, row in rows.items()}
        states = self.reopen_policy.initial_statuses(profile.current_phase)
        await self.phase_metadata.write_states(student_id, profile.country, states)
        return {state.phase: state for state in states}

    # ========================================================================
    # Country tracks
    # ========================================================================

    async def create_country_profile(
        self,
        student_id: UUID,
        data: CountryProfileCreate,
        actor_id: Optional[UUID] = None,
    ) -> StudentCountryProfile:
        """
        Add a country track to a student. The track starts at the first phase.

        Raises:
            NotFoundError: Unknown student
            ValidationError: Blank country
            DuplicateError: The student already has a track for the country
        """
        await self._require_student(student_id)

        country = normalize_country(data.country)
        if not country:
            raise ValidationError("Country is required", details={"country": data.country})

        existing = await self.profiles.get_by_student_and_country(student_id, country)
        if existing:
            raise DuplicateError(
                f"Student already has a {country} track",
                operation="insert",
                table="student_country_profiles",
            )

        profile = StudentCountryProfile(
            student_id=student_id,
            country=country,
            current_phase=FIRST_PHASE.value,
            preferred_country=data.preferred_country,
            country_ranking=data.country_ranking,
            notes=data.notes,
        )
        summarize_applications(
            await self.applications.get_by_student(student_id), country
        ).apply_to(profile)
        profile = await self.profiles.save(profile)

        await self.phase_metadata.write_states(
            student_id, country, self.reopen_policy.initial_statuses(FIRST_PHASE.value)
        )
        await self.activities.log(
            ActivityEntry(
                type=ActivityType.COUNTRY_PROFILE_CREATED,
                description=f"Added {country} to target countries",
                metadata={"country": country, "phase": FIRST_PHASE.value},
            ),
            student_id=student_id,
            actor_id=actor_id,
            country=country,
        )

        logger.info(f"Country track {country} created for student {student_id}")
        return profile

    async def list_country_profiles(self, student_id: UUID) -> List[StudentCountryProfile]:
        """A student's tracks with application totals recomputed."""
        await self._require_student(student_id)

        profiles = await self.profiles.get_by_student(student_id)
        applications = await self.applications.get_by_student(student_id)
        for profile in profiles:
            summarize_applications(applications, profile.country).apply_to(profile)
        return profiles

    # ========================================================================
    # Phase changes
    # ========================================================================

    async def change_phase(
        self,
        student_id: UUID,
        target_phase: str,
        actor_id: Optional[UUID] = None,
        country: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Move a student (or one of their country tracks) to ``target_phase``.

        The student row (and the profile row, when country-scoped) is locked
        before documents are read, so the decision and the write see the
        same snapshot.

        Returns:
            The accepted result plus the notification text

        Raises:
            InvalidPhaseError, NoChangeRequestedError,
            MissingRequiredDocumentsError, PhaseLockedError, NotFoundError
        """
        student = await self._require_student(student_id, for_update=True)

        profile = None
        if country:
            profile = await self._require_profile(student_id, country, for_update=True)
            current_phase = profile.current_phase
            country_name = profile.country
        else:
            current_phase = student.current_phase
            country_name = None

        documents = await self.documents.get_by_student(student_id)
        result = self.sequencer.request_phase_change(
            current_phase, target_phase, documents, country_name
        )

        if not result.accepted:
            if result.reason == RejectionReason.INVALID_PHASE:
                bad = target_phase if try_parse_phase(target_phase) is None else current_phase
                raise InvalidPhaseError(bad)
            if result.reason == RejectionReason.NO_CHANGE_REQUESTED:
                raise NoChangeRequestedError(result.target_phase)
            raise MissingRequiredDocumentsError(
                build_remediation_message(result), result.to_dict()
            )

        previous = parse_phase(result.previous_phase)
        new = parse_phase(result.new_phase)

        if profile is not None:
            states = await self._track_states(student_id, profile)
            target_state = states.get(new.value)
            if target_state is not None:
                self.reopen_policy.ensure_enterable(target_state)

            advanced = self.reopen_policy.advance(list(states.values()), previous, new)
            await self.phase_metadata.write_states(student_id, profile.country, advanced)

            profile.current_phase = new.value
            await self.profiles.save(profile)
        else:
            await self.students.set_phase(student, new.value)

        await self.activities.log(
            result.activity,
            student_id=student_id,
            actor_id=actor_id,
            country=country_name,
        )

        logger.info(
            f"Student {student_id} moved {previous.value} -> {new.value}"
            f"{f' ({country_name})' if country_name else ''}"
        )

        response = result.to_dict()
        response["country"] = country_name
        response["notification"] = phase_change_notification(
            previous.value, new.value, country_name, remarks
        )
        return response

    async def reopen_phase(
        self,
        student_id: UUID,
        country: str,
        phase: str,
        actor_id: Optional[UUID] = None,
    ) -> Dict[str, Any]:
        """
        Reopen a completed phase of a country track.

        A rejected attempt past the reopen limit still locks the phase;
        the lock is committed before the error is raised.

        Raises:
            InvalidPhaseError, PhaseReopenError, PhaseLockedError, NotFoundError
        """
        profile = await self._require_profile(student_id, country, for_update=True)
        target = parse_phase(phase)

        states = await self._track_states(student_id, profile)
        state = states.get(target.value)
        if state is None:
            raise InvalidPhaseError(phase)

        decision = self.reopen_policy.reopen(profile.current_phase, target.value, state)

        if not decision.allowed:
            if decision.updated is not None:
                await self.phase_metadata.write_states(
                    student_id, profile.country, [decision.updated]
                )
                await self.session.commit()
            logger.warning(
                f"Reopen of {target.value} ({profile.country}) for student "
                f"{student_id} rejected: {decision.message}"
            )
            error_class = PhaseLockedError if decision.locked else PhaseReopenError
            final = decision.updated or state
            raise error_class(
                decision.message,
                phase=target.value,
                status=final.status.value,
                reopen_count=final.reopen_count,
                max_reopen_allowed=final.max_reopen_allowed,
            )

        updated = [decision.updated]
        for name in decision.reset_phases:
            if name in states:
                updated.append(replace(states[name], status=PhaseStatus.PENDING))
        await self.phase_metadata.write_states(student_id, profile.country, updated)

        previous_phase = profile.current_phase
        profile.current_phase = target.value
        await self.profiles.save(profile)

        await self.activities.log(
            decision.activity,
            student_id=student_id,
            actor_id=actor_id,
            country=profile.country,
        )

        logger.info(
            f"Student {student_id} reopened {target.value} ({profile.country}), "
            f"{decision.updated.edits_left} edits left"
        )
        return {
            "message": decision.message,
            "country": profile.country,
            "previousPhase": previous_phase,
            "currentPhase": target.value,
            "reopenCount": decision.updated.reopen_count,
            "maxReopenAllowed": decision.updated.max_reopen_allowed,
            "editsLeft": decision.updated.edits_left,
            "finalEditAllowed": decision.updated.final_edit_allowed,
            "resetPhases": decision.reset_phases,
        }

    # ========================================================================
    # Applications
    # ========================================================================

    async def update_application_status(
        self,
        student_id: UUID,
        application_id: UUID,
        status: str,
        actor_id: Optional[UUID] = None,
    ) -> Dict[str, Any]:
        """
        Record a new status on one university application and refresh the
        totals of the matching country track.

        Raises:
            ValidationError: Unknown status
            NotFoundError: Unknown application, or one of another student
        """
        try:
            new_status = ApplicationStatus(status)
        except ValueError:
            raise ValidationError(
                f"Invalid application status: {status}",
                details={
                    "status": status,
                    "allowed": [s.value for s in ApplicationStatus],
                },
            )

        application: Optional[UniversityApplication] = (
            await self.applications.get_for_update(application_id)
        )
        if application is None or application.student_id != student_id:
            raise NotFoundError(
                f"Application {application_id} not found for student {student_id}",
                operation="select",
                table="university_applications",
            )

        previous_status = getattr(
            application.application_status, "value", application.application_status
        )
        application.application_status = new_status
        await self.applications.save(application)

        country = normalize_country(application.university_country) or None
        totals = None
        if country:
            profile = await self.profiles.get_by_student_and_country(
                student_id, country, for_update=True
            )
            if profile is not None:
                applications = await self.applications.get_by_student(student_id)
                summary = summarize_applications(applications, profile.country)
                summary.apply_to(profile)
                await self.profiles.save(profile)
                totals = summary.to_dict()

        await self.activities.log(
            ActivityEntry(
                type=ActivityType.APPLICATION_STATUS_CHANGE,
                description=(
                    f"{application.university_name} application moved from "
                    f"{previous_status} to {new_status.value}"
                ),
                metadata={
                    "applicationId": str(application_id),
                    "previousStatus": previous_status,
                    "newStatus": new_status.value,
                },
            ),
            student_id=student_id,
            actor_id=actor_id,
            country=country,
        )

        logger.info(
            f"Application {application_id} of student {student_id}: "
            f"{previous_status} -> {new_status.value}"
        )
        return {
            "applicationId": str(application_id),
            "previousStatus": previous_status,
            "status": new_status.value,
            "country": country,
            "countryTotals": totals,
        }

    async def activity_history(self, student_id: UUID, limit: int = 100) -> List[Activity]:
        """Most recent activity-log entries of a student, newest first."""
        await self._require_student(student_id)
        return await self.activities.get_by_student(student_id, limit=limit)

    # ========================================================================
    # Progress
    # ========================================================================

    def _report(self, profile, documents, applications) -> ProgressReport:
        visa_status = getattr(profile.visa_status, "value", profile.visa_status)
        return self.calculator.describe_progress(
            profile, documents, applications, visa_status=visa_status
        )

    async def country_progress(self, student_id: UUID) -> List[ProgressReport]:
        """Progress report for each of a student's country tracks."""
        await self._require_student(student_id)

        profiles = await self.profiles.get_by_student(student_id)
        documents = await self.documents.get_by_student(student_id)
        applications = await self.applications.get_by_student(student_id)

        return [self._report(p, documents, applications) for p in profiles]

    async def multi_country_overview(self) -> List[Dict[str, Any]]:
        """
        Students pursuing more than one country, with per-country progress.

        Aliased country names ("UK", "United Kingdom") count once.
        """
        profiles = await self.profiles.list_all()
        multi = students_with_multiple_countries(profiles)
        if not multi:
            return []

        student_ids = list(multi.keys())
        students = {s.id: s for s in await self.students.get_many(student_ids)}
        documents = await self.documents.get_by_students(student_ids)
        applications = await self.applications.get_by_students(student_ids)

        by_track: Dict[tuple, StudentCountryProfile] = {}
        for profile in profiles:
            by_track.setdefault((profile.student_id, country_key(profile.country)), profile)

        overview = []
        for student_id, countries in multi.items():
            student = students.get(student_id)
            reports = [
                self._report(
                    by_track[(student_id, country_key(name))],
                    documents.get(student_id, []),
                    applications.get(student_id, []),
                ).to_dict()
                for name in countries
            ]
            overview.append({
                "studentId": str(student_id),
                "studentName": student.full_name if student else None,
                "globalPhase": student.current_phase if student else None,
                "countryCount": len(countries),
                "countries": reports,
            })
        return overview
