"""
Document verification unit tests
"""
import pytest
from config.settings import settings
from immidraft.services.document_verification_service import (
    document_verification_service,
    extract_document_info,
    generate_verification_email,
    is_likely_screenshot,
    score_document,
    verdict_for_score,
)
from immidraft.utils.exceptions import GPTAPIError


DIPLOMA_TEXT = """DIPLOMA

This certifies that

JOHN SMITH

has successfully completed all requirements for the degree of

BACHELOR OF SCIENCE IN COMPUTER SCIENCE

with all rights, privileges, and honors pertaining thereto.

Given at University of Technology on May 15, 2022

[Signature]
President of the University"""

TRANSCRIPT_TEXT = """ACADEMIC TRANSCRIPT

Student: Jane Doe
Student ID: 12345678
Program: Master of Business Administration

COURSES                                GRADE
Business Strategy                      A
Financial Management                   B+
Marketing Management                   A-
Organizational Behavior                A
Business Ethics                        B+

GPA: 3.7

Issued on: January 10, 2023"""

WEAK_TEXT = "This document confirms that the holder completed a course in advanced welding techniques."


def verify(text, filename, **kwargs):
    return document_verification_service.verify_document(
        filename, text.encode("utf-8"), "text/plain", **kwargs
    )


def test_is_likely_screenshot():
    assert is_likely_screenshot("Screenshot 2024-01-01.png")
    assert is_likely_screenshot("screen shot.png")
    assert is_likely_screenshot("capture_01.jpg")
    assert not is_likely_screenshot("diploma.pdf")


@pytest.mark.parametrize("score, verdict", [
    (99, "Likely Authentic"),
    (86, "Likely Authentic"),
    (85, "Inconclusive"),
    (71, "Inconclusive"),
    (70, "Possibly Fake"),
    (40, "Possibly Fake"),
])
def test_verdict_thresholds(score, verdict):
    assert verdict_for_score(score) == verdict


def test_extract_document_info_from_diploma():
    info = extract_document_info(DIPLOMA_TEXT, "diploma.txt")

    assert info["document_type"] == "Diploma/Degree"
    assert info["institution_name"].startswith("University of Technology")
    assert info["recipient_name"].startswith("JOHN SMITH")
    assert info["issue_date"] == "May 15, 2022"
    assert info["degree_or_certification"].startswith("degree of")
    assert info["has_signature"] is True
    assert info["suspicious_patterns"] == 0
    assert info["specific_flags"] == []
    assert info["key_elements"][0] == "DIPLOMA"


def test_score_is_clamped():
    weak = extract_document_info(WEAK_TEXT, "notes.txt")
    assert score_document(weak, screenshot=True) == 40


class TestVerifyDocument:
    """verify_document tests"""

    @pytest.mark.unit
    def test_complete_diploma_is_inconclusive(self):
        result = verify(DIPLOMA_TEXT, "diploma.txt", use_ai=False)

        assert result["confidence_score"] == 85
        assert result["verdict"] == "Inconclusive"
        assert result["flags"] == []
        assert result["suggested_action"].startswith("Additional verification required. Consider contacting University of Technology")
        assert "Dear University of Technology" in result["email_template"]
        assert result["metadata_analysis"]["suspicious"] is False
        assert result["extracted_info"]["document_type"] == "Diploma/Degree"
        assert "ai_review" not in result

    @pytest.mark.unit
    def test_screenshot_penalty(self):
        result = verify(DIPLOMA_TEXT, "Screenshot diploma.txt", use_ai=False)

        assert result["confidence_score"] == 70
        assert result["verdict"] == "Possibly Fake"
        assert result["flags"] == ["Document appears to be a screenshot rather than an original"]
        assert result["metadata_analysis"]["software"] == "Screenshot Tool"
        assert result["metadata_analysis"]["suspicious"] is True
        assert result["suggested_action"].startswith("Contact University of Technology")

    @pytest.mark.unit
    def test_transcript_with_unusual_filename(self):
        result = verify(TRANSCRIPT_TEXT, "transcript_unusual.txt", use_ai=False)

        # 85 - 10 (signature) - 12 (institution) - 3 * 5 (patterns)
        assert result["confidence_score"] == 48
        assert result["verdict"] == "Possibly Fake"
        assert result["flags"] == [
            "No signature detected on document",
            "No clear issuing institution identified",
            "Unusual color patterns detected",
        ]
        assert result["extracted_info"]["issue_date"] == "January 10, 2023"
        assert result["extracted_info"]["institution_name"] == "Unknown"
        assert "Contact the issuing institution" in result["suggested_action"]

    @pytest.mark.unit
    def test_weak_document(self):
        result = verify(WEAK_TEXT, "notes.txt", use_ai=False)

        assert result["confidence_score"] == 40
        assert result["verdict"] == "Possibly Fake"
        assert result["flags"][0] == "Document contains minimal text content"
        assert "Document text is unusually short" in result["flags"]
        assert "No issue date found on document" in result["flags"]

    @pytest.mark.unit
    def test_insufficient_text(self):
        result = verify("Too short", "diploma.txt", use_ai=False)

        assert result == {
            "verdict": "Inconclusive",
            "confidence_score": 0,
            "flags": ["Insufficient text extracted from document"],
            "suggested_action": "Please upload a clearer image or a different document format",
        }

    @pytest.mark.unit
    def test_unreadable_image_is_insufficient(self):
        result = document_verification_service.verify_document(
            "diploma.png", b"\x89PNG\r\n", "image/png", use_ai=False
        )
        assert result["confidence_score"] == 0

    @pytest.mark.unit
    def test_ai_review_adds_red_flags(self, fake_gpt):
        fake_gpt.queue(
            '{"verdict": "Possibly Fake", "confidence_score": 30, '
            '"red_flags": ["Seal looks altered"], "recommended_action": "Call the registrar"}'
        )

        result = verify(DIPLOMA_TEXT, "diploma.txt", use_ai=True)

        assert result["ai_review"]["verdict"] == "Possibly Fake"
        assert "Seal looks altered" in result["flags"]
        assert result["confidence_score"] == 85
        assert fake_gpt.calls[0]["timeout"] == settings.verification_ai_timeout_seconds

    @pytest.mark.unit
    def test_ai_review_failure_keeps_heuristic_result(self, fake_gpt):
        fake_gpt.error = GPTAPIError("timed out")

        result = verify(DIPLOMA_TEXT, "diploma.txt", use_ai=True)

        assert "ai_review" not in result
        assert result["verdict"] == "Inconclusive"


def test_generate_verification_email():
    email = generate_verification_email("diploma.pdf", "Diploma/Degree", "Harvard University")
    assert email.startswith("Subject: Verification Request for Document diploma.pdf")
    assert "Dear Harvard University Registrar," in email
    assert "- Document Type: Diploma/Degree" in email

    default = generate_verification_email("diploma.pdf", "Diploma/Degree")
    assert "Dear the issuing institution Registrar," in default
