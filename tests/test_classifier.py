"""Tests for hearingsync.classifier — keyword vocabularies and priority order."""

from __future__ import annotations

import pytest

from hearingsync.classifier import (
    RULE_BASED_CONFIDENCE,
    classify,
    detect_claim_type,
    detect_key_issues,
    detect_representation_status,
    extract_legal_info,
)
from hearingsync.models import ContentType


class TestClaimType:
    def test_workers_compensation(self):
        assert detect_claim_type("Claim under workers' compensation law") == "Workers Compensation"

    def test_workers_comp_short_form(self):
        assert detect_claim_type("a WORKERS COMP matter") == "Workers Compensation"

    def test_priority_order_not_lexical(self):
        text = "disability benefits after a workers' compensation injury"
        assert detect_claim_type(text) == "Workers Compensation"

    def test_personal_injury_before_disability(self):
        assert detect_claim_type("personal injury causing disability") == "Personal Injury"

    def test_wrongful_termination_is_employment(self):
        assert detect_claim_type("wrongful termination suit") == "Employment"

    def test_default_general(self):
        assert detect_claim_type("a contract dispute") == "General"


class TestKeyIssues:
    def test_no_signal_defaults(self):
        assert detect_key_issues("The weather is nice today.") == ["Case Review Needed"]

    def test_all_matches_in_vocabulary_order(self):
        text = "Settlement offer pending; negligence alleged; deadline Friday."
        assert detect_key_issues(text) == ["Liability Dispute", "Settlement Negotiation", "Filing Deadlines"]

    def test_medical_evidence(self):
        assert detect_key_issues("new DIAGNOSIS submitted") == ["Medical Evidence"]


class TestRepresentation:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Applicant appears pro se.", "Unrepresented"),
            ("unrepresented; attorney withdrew", "Unrepresented"),
            ("Represented by Smith & Co.", "Represented"),
            ("defense counsel present", "Represented"),
            ("no mention", "Unknown"),
        ],
    )
    def test_priority(self, text, expected):
        assert detect_representation_status(text) == expected


class TestExtractLegalInfo:
    def test_placeholders(self):
        info = extract_legal_info("nothing useful")
        assert info.applicant_name == "Unknown Applicant"
        assert info.respondent_name == "Unknown Respondent"
        assert info.case_number == "Unknown"
        assert info.hearing_date_text is None
        assert info.hearing_status == "Pending"

    def test_labeled_values(self):
        text = (
            "Applicant: Jane Doe\n"
            "Respondent: ACME CORP\n"
            "Case No: ADJ-12345\n"
            "Hearing Date: 06/26/2025\n"
            "Status: Continued\n"
        )
        info = extract_legal_info(text)
        assert info.applicant_name == "Jane Doe"
        assert info.respondent_name == "ACME CORP"
        assert info.case_number == "ADJ-12345"
        assert info.hearing_date_text == "06/26/2025"
        assert info.hearing_status == "Continued"

    def test_status_needs_labeled_line(self, sample_notice_text):
        assert extract_legal_info(sample_notice_text).hearing_status == "Pending"
        assert extract_legal_info("We asked about the status of the case.").hearing_status == "Pending"
        assert extract_legal_info("Notes\n  Hearing Status: Vacated\n").hearing_status == "Vacated"


class TestClassify:
    def test_workers_comp_only(self):
        result = classify("This matter arises under workers' compensation.")
        assert result.extracted_info.claim_type == "Workers Compensation"
        assert result.detected_legal_content is True

    def test_no_issue_phrase(self):
        result = classify("Hello there")
        assert result.extracted_info.key_issues == ["Case Review Needed"]
        assert result.detected_legal_content is False
        assert result.content_type is ContentType.OTHER

    def test_hearing_notes(self, sample_notice_text):
        result = classify(sample_notice_text)
        assert result.content_type is ContentType.HEARING_NOTES
        assert result.extracted_info.claim_type == "Workers Compensation"
        assert "Medical Evidence" in result.extracted_info.key_issues
        assert "Settlement Negotiation" in result.extracted_info.key_issues
        assert result.extracted_info.representation_status == "Represented"
        assert result.original_text == sample_notice_text

    def test_confidence_constant(self):
        assert classify("").confidence == RULE_BASED_CONFIDENCE
        assert classify("personal injury hearing").confidence == RULE_BASED_CONFIDENCE

    def test_deterministic(self, sample_notice_text):
        assert classify(sample_notice_text) == classify(sample_notice_text)
