"""
Letter API router (petition letters and LetterAI expert drafts)
"""
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from immidraft.api.auth import verify_api_key
from immidraft.services.letter_drafter import letter_drafter
from immidraft.services.letter_service import letter_service
from immidraft.utils.response import success_response, list_response
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/letters", tags=["letters"])


class LetterCreateRequest(BaseModel):
    title: str
    content: str = ""
    client_name: Optional[str] = None
    visa_type: Optional[str] = None
    letter_type: Optional[str] = None
    beneficiary_name: Optional[str] = None
    petitioner_name: Optional[str] = None
    document_ids: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class LetterUpdateRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    client_name: Optional[str] = None
    visa_type: Optional[str] = None
    letter_type: Optional[str] = None
    beneficiary_name: Optional[str] = None
    petitioner_name: Optional[str] = None
    document_ids: Optional[List[str]] = None
    tags: Optional[List[str]] = None


class ExpertLetterDraftRequest(BaseModel):
    visa_type: str
    tags: List[str] = Field(default_factory=list)
    evidence: Optional[Dict[str, Any]] = None
    sample_count: int = Field(1, ge=1, le=5)
    # Save the draft into this letter
    letter_id: Optional[str] = None


@router.post("")
async def create_letter(request: LetterCreateRequest, _: str = Depends(verify_api_key)):
    return success_response(letter_service.create_letter(request.model_dump(exclude_none=True)))


@router.get("")
async def list_letters(
    visa_type: Optional[str] = Query(None),
    letter_type: Optional[str] = Query(None),
    _: str = Depends(verify_api_key)
):
    """Letters, most recently updated first"""
    return list_response(letter_service.list_letters(visa_type, letter_type))


@router.post("/draft-expert")
async def draft_expert_letter(request: ExpertLetterDraftRequest, _: str = Depends(verify_api_key)):
    """
    Draft an expert letter from a sample letter and summarized evidence

    When ``letter_id`` is given the draft replaces that letter's content.
    """
    if request.letter_id:
        letter_service.get_letter(request.letter_id)

    draft = letter_drafter.draft_expert_letter(
        visa_type=request.visa_type,
        tags=request.tags,
        evidence=request.evidence,
        sample_count=request.sample_count,
    )

    if request.letter_id:
        draft["letter"] = letter_service.update_letter(
            request.letter_id, {"content": draft["content"]}
        )

    return success_response(draft)


@router.get("/{letter_id}")
async def get_letter(letter_id: str, _: str = Depends(verify_api_key)):
    return success_response(letter_service.get_letter(letter_id))


@router.put("/{letter_id}")
async def update_letter(letter_id: str, request: LetterUpdateRequest, _: str = Depends(verify_api_key)):
    letter = letter_service.update_letter(letter_id, request.model_dump(exclude_unset=True))
    return success_response(letter)


@router.delete("/{letter_id}")
async def delete_letter(letter_id: str, _: str = Depends(verify_api_key)):
    letter_service.delete_letter(letter_id)
    return success_response({"id": letter_id}, message="Letter deleted")
