"""
Sample letter API router
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from immidraft.api.auth import verify_api_key
from immidraft.services.sample_letters import sample_letter_service
from immidraft.utils.exceptions import ResourceNotFoundError
from immidraft.utils.response import success_response, list_response

router = APIRouter(prefix="/samples", tags=["samples"])


@router.get("")
async def list_samples(visa_type: Optional[str] = Query(None), _: str = Depends(verify_api_key)):
    if visa_type:
        return list_response(sample_letter_service.get_samples_by_visa_type(visa_type))
    return list_response(sample_letter_service.get_all_samples())


@router.get("/best")
async def best_sample(
    visa_type: str = Query(...),
    tags: List[str] = Query(default=[]),
    _: str = Depends(verify_api_key)
):
    """Best-matching sample by tag overlap (``data`` is null when none fits)"""
    return success_response(sample_letter_service.get_best_sample(visa_type, tags))


@router.get("/random")
async def random_sample(visa_type: str = Query(...), _: str = Depends(verify_api_key)):
    """Any sample of the visa type, for browsing (``data`` is null when none exists)"""
    return success_response(sample_letter_service.get_random_sample(visa_type))


@router.get("/{sample_id}")
async def get_sample(sample_id: str, _: str = Depends(verify_api_key)):
    sample = sample_letter_service.get_sample_by_id(sample_id)
    if sample is None:
        raise ResourceNotFoundError("SampleLetter", sample_id)
    return success_response(sample)
