"""
Document verification API router (VerifyAI)
"""
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel
from immidraft.api.auth import verify_api_key
from immidraft.api.uploads import read_upload
from immidraft.services.document_verification_service import (
    document_verification_service,
    generate_verification_email,
)
from immidraft.utils.response import success_response

router = APIRouter(prefix="/verifications", tags=["verifications"])


class VerificationEmailRequest(BaseModel):
    document_name: str
    document_type: str = "Unknown"
    institution: Optional[str] = None


@router.post("")
async def verify_document(
    file: UploadFile = File(...),
    use_ai: Optional[bool] = Form(None),
    _: str = Depends(verify_api_key)
):
    """Authenticity check for an uploaded credential"""
    filename, content, mime_type = await read_upload(file)
    result = document_verification_service.verify_document(filename, content, mime_type, use_ai)
    return success_response({"document_name": filename, **result})


@router.post("/email")
async def verification_email(request: VerificationEmailRequest, _: str = Depends(verify_api_key)):
    """Registrar email asking the institution to confirm a document"""
    email = generate_verification_email(request.document_name, request.document_type, request.institution)
    return success_response({"email_template": email})
