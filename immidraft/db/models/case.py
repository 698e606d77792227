"""
Case model - one visa petition for a beneficiary/petitioner pair
"""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from immidraft.db.base import BaseModel
from immidraft.utils.helpers import generate_uuid


class Case(BaseModel):
    """Visa petition case table"""
    __tablename__ = "cases"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_first_name = Column(String(100), nullable=False)
    client_last_name = Column(String(100), nullable=False)
    client_email = Column(String(255))
    client_phone = Column(String(50))
    client_company = Column(String(255))
    visa_type = Column(String(50), nullable=False)
    beneficiary_name = Column(String(255))
    petitioner_name = Column(String(255))
    job_title = Column(String(255))
    job_description = Column(Text)
    status = Column(String(50), nullable=False, default="draft")  # free text set by the workspace
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    documents = relationship("Document", back_populates="case", cascade="all, delete-orphan")
