"""
Document verification API integration tests
"""

DIPLOMA = b"""DIPLOMA

This certifies that

JOHN SMITH

has successfully completed all requirements for the degree of

BACHELOR OF SCIENCE IN COMPUTER SCIENCE

with all rights, privileges, and honors pertaining thereto.

Given at University of Technology on May 15, 2022

[Signature]
President of the University"""


def test_verify_uploaded_diploma(client, auth_headers, fake_gpt):
    response = client.post(
        "/verifications",
        files={"file": ("diploma.txt", DIPLOMA, "text/plain")},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["document_name"] == "diploma.txt"
    assert data["verdict"] == "Inconclusive"
    assert data["confidence_score"] == 85
    assert data["extracted_info"]["issue_date"] == "May 15, 2022"
    assert "ai_review" not in data
    assert fake_gpt.calls == []


def test_verify_with_ai_review(client, auth_headers, fake_gpt):
    fake_gpt.queue('{"verdict": "Likely Authentic", "confidence_score": 90, "red_flags": []}')

    response = client.post(
        "/verifications",
        files={"file": ("diploma.txt", DIPLOMA, "text/plain")},
        data={"use_ai": "true"},
        headers=auth_headers
    )

    data = response.json()["data"]
    assert data["ai_review"]["verdict"] == "Likely Authentic"
    assert data["verdict"] == "Inconclusive"


def test_verify_short_document(client, auth_headers):
    response = client.post(
        "/verifications",
        files={"file": ("note.txt", b"Hello", "text/plain")},
        headers=auth_headers
    )

    data = response.json()["data"]
    assert data["confidence_score"] == 0
    assert data["flags"] == ["Insufficient text extracted from document"]


def test_verification_email(client, auth_headers):
    response = client.post(
        "/verifications/email",
        json={"document_name": "diploma.pdf", "document_type": "Diploma/Degree", "institution": "MIT"},
        headers=auth_headers
    )

    email = response.json()["data"]["email_template"]
    assert "Dear MIT Registrar," in email
    assert "- Document Name: diploma.pdf" in email
