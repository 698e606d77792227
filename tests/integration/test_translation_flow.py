"""
Translation flow integration tests
"""
import io
from docx import Document as DocxDocument
from immidraft.utils.exceptions import GPTAPIError


def upload(client, auth_headers, name="certidao.txt", content=b"Certidao de nascimento\nMaria Lopez",
           mime="text/plain", **form):
    response = client.post(
        "/translations",
        files={"file": (name, content, mime)},
        data=form,
        headers=auth_headers
    )
    assert response.status_code == 200
    return response.json()["data"]


def test_translation_flow(client, auth_headers, fake_gpt):
    record = upload(client, auth_headers, language_from="pt", language_to="en")
    assert record["status"] == "ocr"
    assert record["ocr_text"] == "Certidao de nascimento\nMaria Lopez"

    response = client.post(f"/translations/{record['id']}/report", headers=auth_headers)
    assert response.status_code == 400

    fake_gpt.queue("Birth certificate\nMaria Lopez")
    response = client.post(f"/translations/{record['id']}/translate", headers=auth_headers)
    translated = response.json()["data"]
    assert translated["status"] == "translated"
    assert translated["translated_text"] == "Birth certificate\nMaria Lopez"
    assert " from pt" in fake_gpt.prompts[0]

    response = client.put(
        f"/translations/{record['id']}/text",
        json={"translated_text": "Birth Certificate\nMaria Lopez"},
        headers=auth_headers
    )
    assert response.json()["data"]["status"] == "edited"

    response = client.post(
        f"/translations/{record['id']}/report", params={"format": "json"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    report = response.json()
    assert report["translated_text"] == "Birth Certificate\nMaria Lopez"
    assert report["original_text"] == "Certidao de nascimento\nMaria Lopez"

    response = client.post(f"/translations/{record['id']}/report", headers=auth_headers)
    assert 'filename="certidao_translation.docx"' in response.headers["content-disposition"]
    paragraphs = [p.text for p in DocxDocument(io.BytesIO(response.content)).paragraphs]
    assert "Birth Certificate" in paragraphs
    assert "Translated to: en" in paragraphs

    stored = client.get(f"/translations/{record['id']}", headers=auth_headers).json()["data"]
    assert stored["status"] == "completed"
    assert stored["report_path"]


def test_translate_with_auto_source_and_new_target(client, auth_headers, fake_gpt):
    record = upload(client, auth_headers)
    assert record["language_from"] == "auto"

    fake_gpt.queue("Acte de naissance")
    response = client.post(
        f"/translations/{record['id']}/translate",
        json={"language_to": "fr"},
        headers=auth_headers
    )

    assert response.json()["data"]["language_to"] == "fr"
    assert " from " not in fake_gpt.prompts[0]


def test_translation_error_is_kept_as_text(client, auth_headers, fake_gpt):
    record = upload(client, auth_headers)
    fake_gpt.error = GPTAPIError("quota exceeded")

    response = client.post(f"/translations/{record['id']}/translate", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["translated_text"].startswith("[Translation Error:")


def test_unreadable_upload_cannot_be_translated(client, auth_headers):
    record = upload(client, auth_headers, name="scan.png", content=b"\x89PNG\r\n\x1a\n", mime="image/png")
    assert record["status"] == "uploaded"
    assert record["ocr_text"] is None

    response = client.post(f"/translations/{record['id']}/translate", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


def test_list_and_delete(client, auth_headers):
    record = upload(client, auth_headers)

    items = client.get("/translations", headers=auth_headers).json()["data"]["items"]
    assert [item["id"] for item in items] == [record["id"]]

    assert client.delete(f"/translations/{record['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/translations/{record['id']}", headers=auth_headers).status_code == 404


def test_docx_report_strips_control_characters(client, auth_headers, fake_gpt):
    record = upload(client, auth_headers, content=b"Certidao de nascimento\x01Maria Lopez")
    assert record["ocr_text"] == "Certidao de nascimento\x01Maria Lopez"

    fake_gpt.queue("Birth certificate\x01Maria Lopez")
    client.post(f"/translations/{record['id']}/translate", headers=auth_headers)

    response = client.post(f"/translations/{record['id']}/report", headers=auth_headers)
    assert response.status_code == 200
    paragraphs = [p.text for p in DocxDocument(io.BytesIO(response.content)).paragraphs]
    assert "Birth certificateMaria Lopez" in paragraphs

    client.put(
        f"/translations/{record['id']}/text",
        json={"translated_text": "Birth Certificate\u000b\u0000Maria Lopez"},
        headers=auth_headers
    )
    response = client.post(f"/translations/{record['id']}/report", headers=auth_headers)
    assert response.status_code == 200
    paragraphs = [p.text for p in DocxDocument(io.BytesIO(response.content)).paragraphs]
    assert "Birth CertificateMaria Lopez" in paragraphs
