"""
Unit tests for remediation and notification text.
"""

from app.domain.workflow.remediation import (
    NEXT_STEPS,
    build_remediation_message,
    phase_change_description,
    phase_change_notification,
)
from app.domain.workflow.sequencer import PhaseSequencer


class TestRemediationMessage:
    def test_lists_each_missing_document(self, partial_documents):
        rejection = PhaseSequencer().request_phase_change(
            "DOCUMENT_COLLECTION", "UNIVERSITY_SHORTLISTING", partial_documents
        )

        message = build_remediation_message(rejection)

        assert message.startswith("Cannot proceed to University Shortlisting phase\n")
        assert "• RECOMMENDATION LETTER: Recommendation letters" in message
        assert "• STATEMENT OF PURPOSE: Statement of Purpose (SOP)" in message
        assert "• CV RESUME: Updated CV or Resume" in message
        assert "• PASSPORT" not in message
        for i, step in enumerate(NEXT_STEPS, start=1):
            assert f"{i}. {step}" in message
        assert message.endswith("Need help? Contact your counselor for assistance.")

    def test_country_in_heading(self):
        message = build_remediation_message({
            "targetPhaseName": "Offer Received",
            "phaseDescription": "",
            "missingDocuments": ["I_20_FORM"],
            "country": "United States",
        })

        assert message.startswith("Cannot proceed to Offer Received phase (United States)")
        assert "• I 20 FORM: Required document" in message


class TestActivityText:
    def test_description_spaces_underscores(self):
        assert phase_change_description("CAS_VISA", "VISA_APPLICATION") == (
            "Student moved from CAS VISA to VISA APPLICATION"
        )


class TestNotification:
    def test_country_and_remarks(self):
        text = phase_change_notification(
            "INTERVIEW", "FINANCIAL_TB_TEST", country="Canada", remarks="medicals booked"
        )

        assert text == (
            "[Canada] Application progress has been updated from Interview to "
            "Financial & TB Test. Remarks: medicals booked"
        )

    def test_plain(self):
        assert phase_change_notification("OFFER_RECEIVED", "INITIAL_PAYMENT") == (
            "Application progress has been updated from Offer Received to Initial Payment."
        )
