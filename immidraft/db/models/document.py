"""
Document model - uploaded file plus its document-AI results
"""
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.constants import DocumentStatus
from immidraft.utils.helpers import generate_uuid


class Document(BaseModel):
    """Uploaded document table"""
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"))
    letter_id = Column(String(36), ForeignKey("letters.id", ondelete="SET NULL"))
    name = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)  # bytes
    type = Column(String(100))  # MIME type
    storage_path = Column(String(500), nullable=False)
    category = Column(String(50))
    tags = Column(JSON, default=list)
    criteria = Column(JSON, default=list)
    extracted_text = Column(Text)
    summary = Column(Text)
    ai_tags = Column(JSON, default=list)
    status = Column(String(20), nullable=False, default=DocumentStatus.UPLOADED.value)
    processing_error = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    case = relationship("Case", back_populates="documents")
