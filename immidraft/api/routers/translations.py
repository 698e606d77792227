"""
Translation API router (TranslateAI)
"""
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from immidraft.api.auth import verify_api_key
from immidraft.api.uploads import read_upload
from immidraft.services.translation_service import translation_service
from immidraft.utils.response import success_response, list_response

router = APIRouter(prefix="/translations", tags=["translations"])


class TranslateRequest(BaseModel):
    language_to: Optional[str] = None


class TranslatedTextUpdateRequest(BaseModel):
    translated_text: str


@router.post("")
async def upload_translation_document(
    file: UploadFile = File(...),
    language_from: Optional[str] = Form(None),
    language_to: Optional[str] = Form(None),
    _: str = Depends(verify_api_key)
):
    """Upload a document to translate; its text is extracted right away"""
    filename, content, mime_type = await read_upload(file)
    record = translation_service.upload_document(filename, content, mime_type, language_from, language_to)
    return success_response(record)


@router.get("")
async def list_translation_files(_: str = Depends(verify_api_key)):
    return list_response(translation_service.list_files())


@router.get("/{file_id}")
async def get_translation_file(file_id: str, _: str = Depends(verify_api_key)):
    return success_response(translation_service.get_file(file_id))


@router.post("/{file_id}/translate")
async def translate_file(
    file_id: str,
    request: Optional[TranslateRequest] = None,
    _: str = Depends(verify_api_key)
):
    language_to = request.language_to if request else None
    return success_response(translation_service.translate(file_id, language_to))


@router.put("/{file_id}/text")
async def update_translated_text(
    file_id: str,
    request: TranslatedTextUpdateRequest,
    _: str = Depends(verify_api_key)
):
    """Save reviewer edits to the translation"""
    return success_response(translation_service.update_translated_text(file_id, request.translated_text))


@router.post("/{file_id}/report")
async def generate_translation_report(
    file_id: str,
    format: str = Query("docx", pattern="^(docx|json)$"),
    _: str = Depends(verify_api_key)
):
    """Final translation document download; marks the file completed"""
    report = translation_service.generate_report(file_id, format)
    return Response(
        content=report["content"],
        media_type=report["media_type"],
        headers={"Content-Disposition": f'attachment; filename="{report["file_name"]}"'}
    )


@router.delete("/{file_id}")
async def delete_translation_file(file_id: str, _: str = Depends(verify_api_key)):
    translation_service.delete_file(file_id)
    return success_response({"id": file_id}, message="Translation file deleted")
