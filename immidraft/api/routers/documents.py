"""
Document API router
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel
from config.settings import settings
from immidraft.api.auth import verify_api_key
from immidraft.api.uploads import read_upload, parse_list_field
from immidraft.services.document_processor import document_processor
from immidraft.services.document_service import document_service
from immidraft.services.storage import storage
from immidraft.utils.exceptions import InvalidInputError, StorageError
from immidraft.utils.response import success_response, list_response

router = APIRouter(prefix="/documents", tags=["documents"])


class DocumentUpdateRequest(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    criteria: Optional[List[str]] = None
    letter_id: Optional[str] = None


class CustomPromptRequest(BaseModel):
    prompt: str
    temperature: float = 0.2


@router.post("")
async def upload_document(
    file: UploadFile = File(...),
    case_id: Optional[str] = Form(None),
    letter_id: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    criteria: Optional[str] = Form(None),
    process: bool = Form(True),
    _: str = Depends(verify_api_key)
):
    """Upload a single document, optionally attached to a case or letter"""
    filename, content, mime_type = await read_upload(file)
    document = document_service.upload_document(
        filename=filename,
        content=content,
        mime_type=mime_type,
        case_id=case_id,
        letter_id=letter_id,
        tags=parse_list_field(tags),
        criteria=parse_list_field(criteria),
        process=process,
    )
    return success_response(document)


@router.get("")
async def list_documents(
    case_id: Optional[str] = Query(None),
    letter_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: str = Depends(verify_api_key)
):
    items, total_count = document_service.list_documents(case_id, letter_id, status, limit, offset)
    return list_response(items, total_count, limit, offset)


@router.get("/{document_id}")
async def get_document(document_id: str, _: str = Depends(verify_api_key)):
    return success_response(document_service.get_document(document_id))


@router.patch("/{document_id}")
async def update_document(
    document_id: str,
    request: DocumentUpdateRequest,
    _: str = Depends(verify_api_key)
):
    document = document_service.update_document(document_id, request.model_dump(exclude_unset=True))
    return success_response(document)


@router.post("/{document_id}/process")
async def process_document(document_id: str, _: str = Depends(verify_api_key)):
    """Run document-AI processing (a no-op for processed or failed documents)"""
    return success_response(document_processor.process_document(document_id))


@router.post("/{document_id}/prompt")
async def run_custom_prompt(
    document_id: str,
    request: CustomPromptRequest,
    _: str = Depends(verify_api_key)
):
    """Run a free-form instruction over the document's extracted text"""
    document = document_service.get_document(document_id)
    if not document.get("extracted_text"):
        raise InvalidInputError("document has no extracted text", "document_id")
    if not request.prompt.strip():
        raise InvalidInputError("prompt is required", "prompt")

    result = document_processor.run_custom_prompt(
        document["extracted_text"], request.prompt, temperature=request.temperature
    )
    return success_response({"document_id": document_id, "result": result})


@router.get("/{document_id}/download")
async def download_document(document_id: str, _: str = Depends(verify_api_key)):
    document = document_service.get_document(document_id)
    file_path = storage.resolve(settings.documents_bucket, document["storage_path"])
    if not file_path.exists():
        raise StorageError(f"object not found: {document['storage_path']}")

    return FileResponse(
        path=str(file_path),
        filename=document["name"],
        media_type=document["type"] or "application/octet-stream"
    )


@router.delete("/{document_id}")
async def delete_document(document_id: str, _: str = Depends(verify_api_key)):
    document_service.delete_document(document_id)
    return success_response({"id": document_id}, message="Document deleted")
