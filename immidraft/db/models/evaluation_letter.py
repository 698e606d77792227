"""
EvaluationLetter model - credential evaluation letter fields
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.helpers import generate_uuid


class EvaluationLetter(BaseModel):
    """Evaluation letter table"""
    __tablename__ = "evaluation_letters"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="SET NULL"))
    client_name = Column(String(255), default="")
    university = Column(String(255))
    country = Column(String(100))
    bachelor_degree = Column(String(255))
    degree_date1 = Column(String(50))
    us_equivalent_degree1 = Column(String(255))
    additional_degree = Column(Boolean, nullable=False, default=False)
    university2 = Column(String(255))
    degree_date2 = Column(String(50))
    us_equivalent_degree2 = Column(String(255))
    university_location = Column(String(255))
    field_of_study = Column(String(255))
    program_length1 = Column(String(50))
    university2_location = Column(String(255))
    field_of_study2 = Column(String(255))
    program_length2 = Column(String(50))
    years = Column(String(20))
    specialty = Column(String(255))
    work_experience_summary = Column(JSON, default=list)
    accreditation_body = Column(String(255))
    degree_level = Column(String(50))
    extracted_text = Column(JSON)
    ai_summary = Column(JSON)
    final_letter_path = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    documents = relationship(
        "EvaluationLetterDocument",
        back_populates="evaluation_letter",
        cascade="all, delete-orphan"
    )
