"""
Evaluation letter flow integration tests
"""
import io
import json
from docx import Document as DocxDocument

EXTRACTED = {
    "fullName": "Ana Silva",
    "fieldOfExpertise": "Mechanical Design",
    "yearsExperience": 10,
    "primaryDegree": {
        "name": "Bacharel em Engenharia Mecanica",
        "university": "Universidade de Sao Paulo",
        "country": "Brazil",
        "graduationYear": "2012",
        "equivalent": "Bachelor of Science",
        "field": "Mechanical Engineering",
    },
    "additionalDegree": None,
    "workExperience": ["Lead engineer at Embraer", "Design engineer at WEG"],
}


def create_letter(client, auth_headers):
    response = client.post("/evaluation-letters", json={"client_name": "Ana Silva"}, headers=auth_headers)
    assert response.status_code == 200
    return response.json()["data"]["id"]


def upload_resume(client, auth_headers, letter_id):
    return client.post(
        f"/evaluation-letters/{letter_id}/documents",
        files=[("files", ("Ana_Silva_CV.txt", b"Ana Silva\nMechanical engineer since 2013", "text/plain"))],
        headers=auth_headers
    )


def test_evaluation_letter_flow(client, auth_headers, fake_gpt):
    letter_id = create_letter(client, auth_headers)

    response = upload_resume(client, auth_headers, letter_id)
    document = response.json()["data"]["documents"][0]
    assert document["document_type"] == "resume"
    assert document["processed"] is False
    assert document["has_text"] is False
    assert "extracted_text" not in document

    response = client.post(f"/evaluation-letters/{letter_id}/extract", headers=auth_headers)
    assert response.json()["data"] == {"message": "No processed documents found"}

    response = client.post(f"/evaluation-letters/{letter_id}/process", headers=auth_headers)
    processed = response.json()["data"]
    assert processed["processed"] == 1
    assert processed["failed"] == 0
    assert processed["documents"][0]["has_text"] is True

    fake_gpt.queue("```json\n" + json.dumps(EXTRACTED) + "\n```")
    response = client.post(f"/evaluation-letters/{letter_id}/extract", headers=auth_headers)

    data = response.json()["data"]
    assert data["extracted_data"]["yearsExperience"] == "10"
    letter = data["letter"]
    assert letter["university"] == "Universidade de Sao Paulo"
    assert letter["bachelor_degree"] == "Bacharel em Engenharia Mecanica"
    assert letter["years"] == "10"
    assert letter["additional_degree"] is False
    assert letter["work_experience_summary"] == EXTRACTED["workExperience"]
    assert "Document: Ana_Silva_CV.txt" in fake_gpt.prompts[0]
    assert fake_gpt.calls[0]["temperature"] == 0.0

    response = client.get(f"/evaluation-letters/{letter_id}/render", headers=auth_headers)
    text = response.json()["data"]["content"]
    assert "Credential Evaluation for Ana Silva" in text
    assert "• Lead engineer at Embraer" in text
    assert "{{" not in text

    response = client.get(
        f"/evaluation-letters/{letter_id}/render", params={"format": "docx"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert 'filename="Evaluation_Letter_Ana_Silva.docx"' in response.headers["content-disposition"]
    paragraphs = [p.text for p in DocxDocument(io.BytesIO(response.content)).paragraphs]
    assert "Lead engineer at Embraer" in paragraphs

    letter = client.get(f"/evaluation-letters/{letter_id}", headers=auth_headers).json()["data"]
    assert letter["final_letter_path"].endswith("Evaluation_Letter_Ana_Silva.docx")
    assert len(letter["documents"]) == 1


def test_manual_edits(client, auth_headers):
    letter_id = create_letter(client, auth_headers)

    response = client.put(
        f"/evaluation-letters/{letter_id}",
        json={"additional_degree": True, "university2": "MIT", "final_letter_path": "x"},
        headers=auth_headers
    )

    letter = response.json()["data"]
    assert letter["additional_degree"] is True
    assert letter["university2"] == "MIT"
    assert letter["final_letter_path"] is None
    assert letter["client_name"] == "Ana Silva"

    items = client.get("/evaluation-letters", headers=auth_headers).json()["data"]["items"]
    assert [item["id"] for item in items] == [letter_id]


def test_unreadable_document_counts_as_failed(client, auth_headers):
    letter_id = create_letter(client, auth_headers)
    client.post(
        f"/evaluation-letters/{letter_id}/documents",
        files=[("files", ("degree.png", b"\x89PNG\r\n\x1a\n", "image/png"))],
        headers=auth_headers
    )

    response = client.post(f"/evaluation-letters/{letter_id}/process", headers=auth_headers)

    result = response.json()["data"]
    assert result["processed"] == 0
    assert result["failed"] == 1
    assert result["documents"][0]["document_type"] == "degree"
    assert result["documents"][0]["processing_error"]


def test_delete_evaluation_letter(client, auth_headers):
    letter_id = create_letter(client, auth_headers)
    upload_resume(client, auth_headers, letter_id)

    assert client.delete(f"/evaluation-letters/{letter_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/evaluation-letters/{letter_id}", headers=auth_headers).status_code == 404


def test_upload_to_unknown_letter(client, auth_headers):
    response = upload_resume(client, auth_headers, "missing")
    assert response.status_code == 404
