"""
Evaluation letter API router (EvalLetterAI)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from immidraft.api.auth import verify_api_key
from immidraft.api.uploads import read_upload
from immidraft.services.evaluation_letter_service import evaluation_letter_service
from immidraft.utils.constants import DOCX_MIME_TYPE
from immidraft.utils.response import success_response, list_response

router = APIRouter(prefix="/evaluation-letters", tags=["evaluation-letters"])


class EvaluationLetterFields(BaseModel):
    case_id: Optional[str] = None
    client_name: Optional[str] = None
    university: Optional[str] = None
    country: Optional[str] = None
    bachelor_degree: Optional[str] = None
    degree_date1: Optional[str] = None
    us_equivalent_degree1: Optional[str] = None
    additional_degree: Optional[bool] = None
    university2: Optional[str] = None
    degree_date2: Optional[str] = None
    us_equivalent_degree2: Optional[str] = None
    university_location: Optional[str] = None
    field_of_study: Optional[str] = None
    program_length1: Optional[str] = None
    university2_location: Optional[str] = None
    field_of_study2: Optional[str] = None
    program_length2: Optional[str] = None
    years: Optional[str] = None
    specialty: Optional[str] = None
    work_experience_summary: Optional[List[str]] = None
    accreditation_body: Optional[str] = None
    degree_level: Optional[str] = None


@router.post("")
async def create_evaluation_letter(request: EvaluationLetterFields, _: str = Depends(verify_api_key)):
    letter = evaluation_letter_service.create_evaluation_letter(request.model_dump(exclude_none=True))
    return success_response(letter)


@router.get("")
async def list_evaluation_letters(_: str = Depends(verify_api_key)):
    return list_response(evaluation_letter_service.list_evaluation_letters())


@router.get("/{letter_id}")
async def get_evaluation_letter(letter_id: str, _: str = Depends(verify_api_key)):
    """Evaluation letter with its source documents"""
    return success_response(evaluation_letter_service.get_evaluation_letter(letter_id))


@router.put("/{letter_id}")
async def update_evaluation_letter(
    letter_id: str,
    request: EvaluationLetterFields,
    _: str = Depends(verify_api_key)
):
    letter = evaluation_letter_service.update_evaluation_letter(
        letter_id, request.model_dump(exclude_unset=True)
    )
    return success_response(letter)


@router.delete("/{letter_id}")
async def delete_evaluation_letter(letter_id: str, _: str = Depends(verify_api_key)):
    evaluation_letter_service.delete_evaluation_letter(letter_id)
    return success_response({"id": letter_id}, message="Evaluation letter deleted")


@router.post("/{letter_id}/documents")
async def upload_evaluation_documents(
    letter_id: str,
    files: List[UploadFile] = File(...),
    document_type: Optional[str] = Form(None),
    _: str = Depends(verify_api_key)
):
    """Upload resumes, degrees and transcripts (type guessed from the filename)"""
    documents = []
    for file in files:
        filename, content, mime_type = await read_upload(file)
        documents.append(evaluation_letter_service.upload_document(
            letter_id, filename, content, mime_type, document_type
        ))
    return success_response({"uploaded_count": len(documents), "documents": documents})


@router.post("/{letter_id}/process")
async def process_evaluation_documents(letter_id: str, _: str = Depends(verify_api_key)):
    """Extract text from the letter's unprocessed documents"""
    return success_response(evaluation_letter_service.process_documents(letter_id))


@router.post("/{letter_id}/extract")
async def extract_evaluation_data(letter_id: str, _: str = Depends(verify_api_key)):
    """Fill the letter fields from the processed documents with the model"""
    return success_response(evaluation_letter_service.extract_data_with_ai(letter_id))


@router.get("/{letter_id}/render")
async def render_evaluation_letter(
    letter_id: str,
    format: str = Query("text", pattern="^(text|docx)$"),
    _: str = Depends(verify_api_key)
):
    """
    The rendered letter

    ``format=text`` returns the letter text in the JSON envelope,
    ``format=docx`` stores and downloads a Word document.
    """
    if format == "docx":
        generated = evaluation_letter_service.generate_docx(letter_id)
        return Response(
            content=generated["content"],
            media_type=DOCX_MIME_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{generated["file_name"]}"'}
        )

    text = evaluation_letter_service.render_letter(letter_id)
    return success_response({"id": letter_id, "content": text})
