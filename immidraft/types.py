"""
Shared type definitions
"""
from typing import TypedDict, Optional, List, Dict, Any


class SampleLetter(TypedDict, total=False):
    """Sample expert letter record"""
    id: str
    visa_type: str
    title: str
    tags: List[str]
    content: str


class ApplicantInfo(TypedDict, total=False):
    name: str
    field: str
    position: str


class ExpertInfo(TypedDict, total=False):
    name: str
    credentials: str
    position: str
    relationship: str


class Evidence(TypedDict, total=False):
    """Summarized evidence fed into letter prompts"""
    applicant: ApplicantInfo
    expert: ExpertInfo
    achievements: List[str]
    publications: List[str]
    awards: List[str]
    other: str


class DocumentAnalysis(TypedDict):
    """Summary and tags returned by document-AI processing"""
    summary: str
    tags: List[str]


class DocumentInfo(TypedDict, total=False):
    """Facts pulled from a document's text for verification"""
    document_type: str
    institution_name: str
    recipient_name: str
    issue_date: str
    degree_or_certification: str
    has_signature: bool
    has_date: bool
    has_institution_name: bool
    suspicious_patterns: int
    specific_flags: List[str]
    key_elements: List[str]


class VerificationResult(TypedDict, total=False):
    """Outcome of a document authenticity check"""
    verdict: str
    confidence_score: int
    flags: List[str]
    suggested_action: str
    email_template: Optional[str]
    metadata_analysis: Optional[Dict[str, Any]]
    extracted_info: Optional[Dict[str, Any]]
    ai_review: Optional[Dict[str, Any]]
