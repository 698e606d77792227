"""
Diploma evaluation API router (EvaluateAI)
"""
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from immidraft.api.auth import verify_api_key
from immidraft.api.uploads import read_upload
from immidraft.services.diploma_evaluation_service import diploma_evaluation_service
from immidraft.utils.constants import DOCX_MIME_TYPE
from immidraft.utils.response import success_response, list_response

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


class EvaluationUpdateRequest(BaseModel):
    us_equivalency: Optional[str] = None
    structured_data: Optional[Dict[str, Any]] = None


@router.post("")
async def upload_evaluation_document(file: UploadFile = File(...), _: str = Depends(verify_api_key)):
    """Upload a diploma or transcript"""
    filename, content, mime_type = await read_upload(file)
    return success_response(diploma_evaluation_service.upload_document(filename, content, mime_type))


@router.get("")
async def list_evaluation_files(_: str = Depends(verify_api_key)):
    return list_response(diploma_evaluation_service.list_files())


@router.get("/{file_id}")
async def get_evaluation_file(file_id: str, _: str = Depends(verify_api_key)):
    return success_response(diploma_evaluation_service.get_file(file_id))


@router.post("/{file_id}/evaluate")
async def evaluate_file(file_id: str, _: str = Depends(verify_api_key)):
    """Extract structured data and determine the US equivalency"""
    return success_response(diploma_evaluation_service.process_evaluation(file_id))


@router.put("/{file_id}")
async def update_evaluation(
    file_id: str,
    request: EvaluationUpdateRequest,
    _: str = Depends(verify_api_key)
):
    record = diploma_evaluation_service.update_evaluation(
        file_id, request.us_equivalency, request.structured_data
    )
    return success_response(record)


@router.post("/{file_id}/report")
async def generate_evaluation_report(file_id: str, _: str = Depends(verify_api_key)):
    report = diploma_evaluation_service.generate_report(file_id)
    return Response(
        content=report["content"],
        media_type=DOCX_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{report["file_name"]}"'}
    )


@router.delete("/{file_id}")
async def delete_evaluation_file(file_id: str, _: str = Depends(verify_api_key)):
    diploma_evaluation_service.delete_file(file_id)
    return success_response({"id": file_id}, message="Evaluation file deleted")
