"""
Diploma evaluation unit tests
"""
import io
import pytest
from docx import Document as DocxDocument
from immidraft.services.diploma_evaluation_service import (
    detect_document_type,
    diploma_evaluation_service,
    format_structured_data,
)
from immidraft.utils.exceptions import GPTAPIError


DIPLOMA_TEXT = (
    "Universidad Nacional\n"
    "Otorga a Maria Lopez el titulo de Ingeniera Civil\n"
    "Bogota, 12 de junio de 2015"
)

TRANSCRIPT_TEXT = (
    "Academic Record\n"
    "Course Number  Course Name          Grade\n"
    "CIV101         Structural Analysis  4.5\n"
    "Cumulative GPA: 4.2"
)


class TestDetectDocumentType:
    """Diploma/transcript detection"""

    @pytest.mark.unit
    def test_plain_diploma(self):
        assert detect_document_type(DIPLOMA_TEXT) == "diploma"

    @pytest.mark.unit
    def test_transcript_indicators(self):
        assert detect_document_type(TRANSCRIPT_TEXT) == "transcript"
        assert detect_document_type("Fall Semester 2014") == "transcript"
        assert detect_document_type("Grade Point Average 3.1") == "transcript"

    @pytest.mark.unit
    def test_empty_text_is_diploma(self):
        assert detect_document_type("") == "diploma"
        assert detect_document_type(None) == "diploma"


def test_format_structured_data_defaults_to_unknown():
    formatted = format_structured_data({"name": "Maria Lopez", "degree": "Ingeniera Civil"})
    lines = formatted.splitlines()

    assert lines[0] == "Name: Maria Lopez"
    assert lines[1] == "Degree: Ingeniera Civil"
    assert "Birthplace: Unknown" in lines
    assert "Courses:" not in formatted


def test_format_structured_data_lists_courses():
    formatted = format_structured_data({
        "courses": [
            {"course_name": "Structural Analysis", "grade_received": "4.5", "credits": 3,
             "semester_or_year": "2013-1"},
            {"course_name": "Hydraulics"},
        ]
    })

    assert "Courses:" in formatted
    assert "1. Structural Analysis - Grade: 4.5, Credits: 3, 2013-1" in formatted
    assert "2. Hydraulics - Grade: N/A, Credits: N/A" in formatted


class TestAISteps:
    """Structured extraction and equivalency with a fake model"""

    @pytest.mark.unit
    def test_extract_structured_data(self, fake_gpt):
        fake_gpt.queue('{"name": "Maria Lopez", "degree": "Ingeniera Civil"}')

        structured = diploma_evaluation_service.extract_structured_data(DIPLOMA_TEXT, "diploma")

        assert structured["name"] == "Maria Lopez"
        assert structured["document_type"] == "diploma"
        assert fake_gpt.calls[0]["response_format"] == {"type": "json_object"}
        assert DIPLOMA_TEXT in fake_gpt.prompts[0]

    @pytest.mark.unit
    def test_extract_structured_data_without_json(self, fake_gpt):
        fake_gpt.queue("I cannot read this document.")
        assert diploma_evaluation_service.extract_structured_data(DIPLOMA_TEXT, "diploma") is None

    @pytest.mark.unit
    def test_equivalency_includes_structured_fields(self, fake_gpt):
        fake_gpt.queue("  Equivalent to a US Bachelor of Science in Civil Engineering.  ")

        result = diploma_evaluation_service.determine_us_equivalency(
            DIPLOMA_TEXT, {"name": "Maria Lopez", "document_type": "diploma"}
        )

        assert result == "Equivalent to a US Bachelor of Science in Civil Engineering."
        assert "Name: Maria Lopez" in fake_gpt.prompts[0]

    @pytest.mark.unit
    def test_equivalency_empty_reply(self, fake_gpt):
        fake_gpt.queue("")
        result = diploma_evaluation_service.determine_us_equivalency(DIPLOMA_TEXT, document_type="diploma")
        assert result == "Unable to determine US equivalency"

    @pytest.mark.unit
    def test_equivalency_error_is_reported_as_text(self, fake_gpt):
        fake_gpt.error = GPTAPIError("service unavailable")

        result = diploma_evaluation_service.determine_us_equivalency(TRANSCRIPT_TEXT)

        assert result.startswith("Error generating US equivalency:")
        assert "service unavailable" in result


def test_report_docx_drops_control_characters():
    record = {
        "filename": "diploma\x01.txt",
        "document_type": "diploma",
        "structured_data": {"name": "Maria\x02 Lopez"},
        "us_equivalency": "Bachelor of Science\x1f in Civil Engineering",
    }

    content = diploma_evaluation_service.build_report_docx(record)

    paragraphs = [p.text for p in DocxDocument(io.BytesIO(content)).paragraphs]
    assert "Document: diploma.txt" in paragraphs
    assert "Bachelor of Science in Civil Engineering" in paragraphs
    assert "Name: Maria Lopez" in paragraphs
