"""
Document processor unit tests
"""
import pytest
from immidraft.services.document_processor import document_processor, MAX_PROMPT_TEXT


@pytest.mark.unit
def test_analyze_text_parses_json(fake_gpt):
    fake_gpt.queue('{"summary": " A resume. ", "tags": ["Resume", " Software ", ""]}')

    analysis = document_processor.analyze_text("Jane Doe, engineer", "resume.pdf", "application/pdf")

    assert analysis == {"summary": "A resume.", "tags": ["resume", "software"]}
    assert "Document name: resume.pdf" in fake_gpt.prompts[0]
    assert "Document type: application/pdf" in fake_gpt.prompts[0]


@pytest.mark.unit
def test_analyze_text_single_tag_string(fake_gpt):
    fake_gpt.queue('```json\n{"summary": "Award letter", "tags": "award"}\n```')

    analysis = document_processor.analyze_text("Award text", "award.txt")

    assert analysis["tags"] == ["award"]


@pytest.mark.unit
def test_analyze_text_non_json_reply(fake_gpt):
    fake_gpt.queue("This is a press article about the applicant.")

    analysis = document_processor.analyze_text("Article", "press.txt")

    assert analysis == {"summary": "This is a press article about the applicant.", "tags": []}


@pytest.mark.unit
def test_analyze_text_truncates_long_documents(fake_gpt):
    fake_gpt.queue('{"summary": "", "tags": []}')

    document_processor.analyze_text("x" * (MAX_PROMPT_TEXT + 500), "long.txt")

    assert "x" * MAX_PROMPT_TEXT in fake_gpt.prompts[0]
    assert "x" * (MAX_PROMPT_TEXT + 1) not in fake_gpt.prompts[0]


@pytest.mark.unit
def test_run_custom_prompt(fake_gpt):
    fake_gpt.queue("  List of awards  ")

    result = document_processor.run_custom_prompt("Award text", "  List the awards  ", temperature=0.0)

    assert result == "List of awards"
    assert fake_gpt.calls[0]["temperature"] == 0.0
    assert "List the awards" in fake_gpt.prompts[0]
    assert "Award text" in fake_gpt.prompts[0]
