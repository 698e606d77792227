"""
TranslationFile model - document sent through TranslateAI
"""
from sqlalchemy import Column, String, Integer, Text, DateTime
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.constants import TranslationStatus
from immidraft.utils.helpers import generate_uuid


class TranslationFile(BaseModel):
    """Translation file table"""
    __tablename__ = "translation_files"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    filename = Column(String(255), nullable=False)
    file_type = Column(String(100))
    file_size = Column(Integer)
    storage_path = Column(String(500), nullable=False)
    ocr_text = Column(Text)
    translated_text = Column(Text)
    language_from = Column(String(20), nullable=False, default="auto")
    language_to = Column(String(20), nullable=False, default="en")
    status = Column(String(20), nullable=False, default=TranslationStatus.UPLOADED.value)
    report_path = Column(String(500))
    uploaded_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
