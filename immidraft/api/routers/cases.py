"""
Case workspace API router
"""
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import BaseModel
from immidraft.api.auth import verify_api_key
from immidraft.api.uploads import read_upload, parse_list_field
from immidraft.services.case_service import case_service
from immidraft.utils.response import success_response, list_response
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cases", tags=["cases"])


class CaseCreateRequest(BaseModel):
    client_first_name: str
    client_last_name: str
    visa_type: str
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    client_company: Optional[str] = None
    beneficiary_name: Optional[str] = None
    petitioner_name: Optional[str] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    status: Optional[str] = None


class CaseUpdateRequest(BaseModel):
    client_first_name: Optional[str] = None
    client_last_name: Optional[str] = None
    visa_type: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    client_company: Optional[str] = None
    beneficiary_name: Optional[str] = None
    petitioner_name: Optional[str] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    status: Optional[str] = None


class CategoryAssignmentRequest(BaseModel):
    # document id -> category key
    assignments: Dict[str, str]


@router.post("")
async def create_case(request: CaseCreateRequest, _: str = Depends(verify_api_key)):
    """Create a case"""
    case = case_service.create_case(request.model_dump(exclude_none=True))
    return success_response(case)


@router.get("")
async def list_cases(
    status: Optional[str] = Query(None),
    visa_type: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _: str = Depends(verify_api_key)
):
    """Cases newest first"""
    items, total_count = case_service.list_cases(status, visa_type, limit, offset)
    return list_response(items, total_count, limit, offset)


@router.get("/{case_id}")
async def get_case(case_id: str, _: str = Depends(verify_api_key)):
    return success_response(case_service.get_case(case_id))


@router.put("/{case_id}")
async def update_case(case_id: str, request: CaseUpdateRequest, _: str = Depends(verify_api_key)):
    case = case_service.update_case(case_id, request.model_dump(exclude_unset=True))
    return success_response(case)


@router.delete("/{case_id}")
async def delete_case(case_id: str, _: str = Depends(verify_api_key)):
    """Delete a case with its documents and stored files"""
    case_service.delete_case(case_id)
    return success_response({"id": case_id}, message="Case deleted")


@router.post("/{case_id}/documents")
async def upload_case_documents(
    case_id: str,
    files: List[UploadFile] = File(...),
    tags: Optional[str] = Form(None),
    criteria: Optional[str] = Form(None),
    process: bool = Form(True),
    _: str = Depends(verify_api_key)
):
    """
    Upload documents into a case

    Each file is stored and, unless ``process`` is false, run through
    document-AI processing. Processing failures are recorded on the
    document rather than failing the request.
    """
    case_service.get_case(case_id)
    tag_list = parse_list_field(tags)
    criteria_list = parse_list_field(criteria)

    documents = []
    for file in files:
        filename, content, mime_type = await read_upload(file)
        documents.append(case_service.add_document_to_case(
            case_id,
            filename,
            content,
            mime_type=mime_type,
            tags=tag_list,
            criteria=criteria_list,
            process=process,
        ))

    logger.info(f"Uploaded {len(documents)} documents to case {case_id}")
    return success_response({"uploaded_count": len(documents), "documents": documents})


@router.get("/{case_id}/documents")
async def list_case_documents(case_id: str, _: str = Depends(verify_api_key)):
    return list_response(case_service.list_case_documents(case_id))


@router.put("/{case_id}/categories")
async def save_document_categories(
    case_id: str,
    request: CategoryAssignmentRequest,
    _: str = Depends(verify_api_key)
):
    """Store categories chosen in the document sorter"""
    documents = case_service.save_document_categories(case_id, request.assignments)
    return list_response(documents)


@router.get("/{case_id}/workspace")
async def get_workspace(case_id: str, _: str = Depends(verify_api_key)):
    """Case, categorized documents and the criteria for its visa type"""
    return success_response(case_service.get_workspace(case_id))
