"""
EvaluationFile model - diploma or transcript sent through EvaluateAI
"""
from sqlalchemy import Column, String, Integer, Text, DateTime, JSON
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.constants import EvaluationStatus
from immidraft.utils.helpers import generate_uuid


class EvaluationFile(BaseModel):
    """Diploma evaluation file table"""
    __tablename__ = "evaluation_files"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    filename = Column(String(255), nullable=False)
    file_type = Column(String(100))
    file_size = Column(Integer)
    storage_path = Column(String(500), nullable=False)
    document_type = Column(String(20))
    extracted_text = Column(Text)
    structured_data = Column(JSON)
    us_equivalency = Column(Text)
    status = Column(String(20), nullable=False, default=EvaluationStatus.UPLOADED.value)
    report_path = Column(String(500))
    uploaded_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
