"""
Letter model - petition and expert letters
"""
from sqlalchemy import Column, String, Text, DateTime, JSON
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.constants import LetterType
from immidraft.utils.helpers import generate_uuid


class Letter(BaseModel):
    """Letter table"""
    __tablename__ = "letters"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    content = Column(Text, default="")
    client_name = Column(String(255))
    visa_type = Column(String(50))
    letter_type = Column(String(20), nullable=False, default=LetterType.PETITION.value)
    beneficiary_name = Column(String(255))
    petitioner_name = Column(String(255))
    document_ids = Column(JSON, default=list)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
