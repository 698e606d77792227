"""
Criterion model - eligibility criteria reference rows
"""
from sqlalchemy import Column, String, Integer, Text
from immidraft.db.base import BaseModel
from immidraft.utils.helpers import generate_uuid


class Criterion(BaseModel):
    """Visa criteria reference table"""
    __tablename__ = "criteria"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    visa_type = Column(String(50), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(50))
    required_count = Column(Integer, nullable=False, default=1)
