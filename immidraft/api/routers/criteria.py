"""
Criteria API router
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from config.visa_types import SUPPORTED_VISA_TYPES
from immidraft.api.auth import verify_api_key
from immidraft.services.criteria_service import criteria_service
from immidraft.utils.response import list_response

router = APIRouter(prefix="/criteria", tags=["criteria"])


@router.get("")
async def list_criteria(visa_type: Optional[str] = Query(None), _: str = Depends(verify_api_key)):
    """Criteria for a visa type ("O-1A" and "O1" give the same rows)"""
    return list_response(criteria_service.list_criteria(visa_type))


@router.get("/visa-types")
async def list_visa_types(_: str = Depends(verify_api_key)):
    """Visa types offered by the case intake form"""
    items = [
        {"visa_type": visa_type, "description": description}
        for visa_type, description in SUPPORTED_VISA_TYPES.items()
    ]
    return list_response(items)
