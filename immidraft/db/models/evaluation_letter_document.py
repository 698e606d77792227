"""
EvaluationLetterDocument model - source files for an evaluation letter
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.constants import EvaluationDocumentType
from immidraft.utils.helpers import generate_uuid


class EvaluationLetterDocument(BaseModel):
    """Evaluation letter source document table"""
    __tablename__ = "evaluation_letter_documents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    evaluation_letter_id = Column(
        String(36),
        ForeignKey("evaluation_letters.id", ondelete="CASCADE"),
        nullable=False
    )
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(100))
    file_size = Column(Integer, nullable=False)
    storage_path = Column(String(500), nullable=False)
    document_type = Column(String(20), nullable=False, default=EvaluationDocumentType.OTHER.value)
    extracted_text = Column(Text)
    processed = Column(Boolean, nullable=False, default=False)
    processing_error = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    evaluation_letter = relationship("EvaluationLetter", back_populates="documents")
