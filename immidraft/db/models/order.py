"""
Order model - paid service request
"""
from sqlalchemy import Column, String, Integer, Float, DateTime, JSON
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.constants import OrderStatus
from immidraft.utils.helpers import generate_uuid


class Order(BaseModel):
    """Service order table"""
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(100), nullable=False)
    user_email = Column(String(255))
    service_type = Column(String(50), nullable=False)
    language_from = Column(String(20))
    language_to = Column(String(20))
    documents = Column(JSON, default=list)  # storage paths
    page_count = Column(Integer, nullable=False)
    price_per_page = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)
    payment_intent_id = Column(String(255))
    status = Column(String(30), nullable=False, default=OrderStatus.PAID.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
