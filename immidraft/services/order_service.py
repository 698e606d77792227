"""
Paid service orders
"""
from typing import Any, Dict, List, Optional
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import Order
from immidraft.utils.constants import PaymentResult, OrderStatus, ServiceType
from immidraft.utils.exceptions import ResourceNotFoundError, ValidationError, InvalidInputError
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

SERVICE_TYPES = {service.value for service in ServiceType}


def calculate_total(page_count: int, price_per_page: float) -> float:
    """
    Order total rounded to cents

    Raises:
        ValidationError: when the page count or price is not positive
    """
    if page_count is None or page_count <= 0:
        raise ValidationError("page_count must be positive", "page_count")
    if price_per_page is None or price_per_page <= 0:
        raise ValidationError("price_per_page must be positive", "price_per_page")
    return round(page_count * price_per_page, 2)


class OrderService:
    """Records orders once the payment sheet reports a result"""

    def create_order(
        self,
        user_id: str,
        service_type: str,
        page_count: int,
        payment_result: str,
        price_per_page: Optional[float] = None,
        user_email: Optional[str] = None,
        language_from: Optional[str] = None,
        language_to: Optional[str] = None,
        documents: Optional[List[str]] = None,
        payment_intent_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create an order after payment

        Only a ``completed`` payment result creates an order; canceled and
        failed payments are rejected.

        Args:
            user_id: ordering user
            service_type: one of ServiceType
            page_count: number of pages
            payment_result: payment sheet result
            price_per_page: defaults to settings.default_price_per_page
            documents: storage paths of the uploaded documents

        Returns:
            serialized order
        """
        if not (user_id or "").strip():
            raise InvalidInputError("user_id is required", "user_id")
        if service_type not in SERVICE_TYPES:
            raise InvalidInputError(f"service_type must be one of {sorted(SERVICE_TYPES)}", "service_type")
        if payment_result != PaymentResult.COMPLETED.value:
            logger.warning(f"Order rejected for user {user_id}: payment {payment_result}")
            raise ValidationError(f"payment was not completed ({payment_result})", "payment_result")

        if price_per_page is None:
            price_per_page = settings.default_price_per_page
        total_amount = calculate_total(page_count, price_per_page)

        with db_manager.get_db_session() as session:
            order = Order(
                user_id=user_id,
                user_email=user_email,
                service_type=service_type,
                language_from=language_from,
                language_to=language_to,
                documents=list(documents or []),
                page_count=page_count,
                price_per_page=price_per_page,
                total_amount=total_amount,
                payment_intent_id=payment_intent_id,
                status=OrderStatus.PAID.value,
            )
            session.add(order)
            session.flush()
            logger.info(f"Order created: {order.id} ({service_type}, {total_amount})")
            return order.to_json()

    def list_orders(self, user_id: str) -> List[Dict[str, Any]]:
        """A user's orders, newest first"""
        with db_manager.get_db_session() as session:
            orders = session.query(Order).filter(
                Order.user_id == user_id
            ).order_by(Order.created_at.desc()).all()
            return [order.to_json() for order in orders]

    def get_order(self, order_id: str) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            order = session.get(Order, order_id)
            if order is None:
                raise ResourceNotFoundError("Order", order_id)
            return order.to_json()


# Global order service instance
order_service = OrderService()
