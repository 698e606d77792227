"""
Order API router
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from immidraft.api.auth import verify_api_key
from immidraft.services.order_service import order_service, calculate_total
from immidraft.utils.response import success_response, list_response
from config.settings import settings

router = APIRouter(prefix="/orders", tags=["orders"])


class OrderCreateRequest(BaseModel):
    user_id: str
    service_type: str
    page_count: int
    payment_result: str
    price_per_page: Optional[float] = None
    user_email: Optional[str] = None
    language_from: Optional[str] = None
    language_to: Optional[str] = None
    documents: List[str] = Field(default_factory=list)
    payment_intent_id: Optional[str] = None


@router.get("/quote")
async def quote_order(
    page_count: int = Query(...),
    price_per_page: Optional[float] = Query(None),
    _: str = Depends(verify_api_key)
):
    """Order total before payment"""
    price = settings.default_price_per_page if price_per_page is None else price_per_page
    return success_response({
        "page_count": page_count,
        "price_per_page": price,
        "total_amount": calculate_total(page_count, price),
    })


@router.post("")
async def create_order(request: OrderCreateRequest, _: str = Depends(verify_api_key)):
    """Record an order once the payment sheet reports a result"""
    return success_response(order_service.create_order(**request.model_dump()))


@router.get("")
async def list_orders(user_id: str = Query(...), _: str = Depends(verify_api_key)):
    return list_response(order_service.list_orders(user_id))


@router.get("/{order_id}")
async def get_order(order_id: str, _: str = Depends(verify_api_key)):
    return success_response(order_service.get_order(order_id))
