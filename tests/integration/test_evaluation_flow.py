"""
Diploma evaluation flow integration tests
"""
import io
from docx import Document as DocxDocument

DIPLOMA = b"Universidad Nacional\nOtorga a Maria Lopez el titulo de Ingeniera Civil\nBogota, 2015"
TRANSCRIPT = b"Academic Record\nMaria Lopez\nCourse Number  Course Name  Grade\nCIV101  Statics  4.5"


def upload(client, auth_headers, name, content):
    response = client.post(
        "/evaluations",
        files={"file": (name, content, "text/plain")},
        headers=auth_headers
    )
    assert response.status_code == 200
    return response.json()["data"]


def test_evaluation_flow(client, auth_headers, fake_gpt):
    record = upload(client, auth_headers, "diploma.txt", DIPLOMA)
    assert record["status"] == "processed"
    assert record["document_type"] == "diploma"

    response = client.post(f"/evaluations/{record['id']}/report", headers=auth_headers)
    assert response.status_code == 400

    fake_gpt.queue(
        '{"name": "Maria Lopez", "degree": "Ingeniera Civil", "university": "Universidad Nacional"}',
        "Equivalent to a Bachelor of Science in Civil Engineering from a US university."
    )
    response = client.post(f"/evaluations/{record['id']}/evaluate", headers=auth_headers)

    evaluated = response.json()["data"]
    assert evaluated["status"] == "evaluated"
    assert evaluated["structured_data"]["name"] == "Maria Lopez"
    assert evaluated["structured_data"]["document_type"] == "diploma"
    assert evaluated["us_equivalency"].startswith("Equivalent to a Bachelor of Science")
    assert "Name: Maria Lopez" in fake_gpt.prompts[1]

    response = client.put(
        f"/evaluations/{record['id']}",
        json={"us_equivalency": "Bachelor of Science in Civil Engineering"},
        headers=auth_headers
    )
    edited = response.json()["data"]
    assert edited["status"] == "edited"
    assert edited["structured_data"]["name"] == "Maria Lopez"

    response = client.post(f"/evaluations/{record['id']}/report", headers=auth_headers)
    assert response.status_code == 200
    assert 'filename="diploma_evaluation.docx"' in response.headers["content-disposition"]
    paragraphs = [p.text for p in DocxDocument(io.BytesIO(response.content)).paragraphs]
    assert "Bachelor of Science in Civil Engineering" in paragraphs
    assert "Name: Maria Lopez" in paragraphs

    stored = client.get(f"/evaluations/{record['id']}", headers=auth_headers).json()["data"]
    assert stored["status"] == "completed"


def test_transcript_detected_on_upload(client, auth_headers):
    record = upload(client, auth_headers, "records.txt", TRANSCRIPT)
    assert record["document_type"] == "transcript"


def test_failed_extraction_still_evaluates(client, auth_headers, fake_gpt):
    record = upload(client, auth_headers, "diploma.txt", DIPLOMA)
    fake_gpt.queue("not json", "")

    evaluated = client.post(f"/evaluations/{record['id']}/evaluate", headers=auth_headers).json()["data"]

    assert evaluated["structured_data"] is None
    assert evaluated["us_equivalency"] == "Unable to determine US equivalency"


def test_list_and_delete(client, auth_headers):
    record = upload(client, auth_headers, "diploma.txt", DIPLOMA)

    items = client.get("/evaluations", headers=auth_headers).json()["data"]["items"]
    assert [item["id"] for item in items] == [record["id"]]

    assert client.delete(f"/evaluations/{record['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/evaluations/{record['id']}", headers=auth_headers).status_code == 404
