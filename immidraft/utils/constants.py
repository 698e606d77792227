"""
Constants module
Hard-coded values kept in one place
"""
from enum import Enum
from typing import Dict, List, Set


# ============================================================================
# Document processing
# ============================================================================

class DocumentStatus(str, Enum):
    """Document-AI processing status"""
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    PROCESSED = "processed"
    ERROR = "error"


# Documents in these states are never processed again
TERMINAL_DOCUMENT_STATUSES: Set[str] = {
    DocumentStatus.PROCESSED.value,
    DocumentStatus.ERROR.value,
}


# ============================================================================
# Upload validation
# ============================================================================

ALLOWED_EXTENSIONS: Set[str] = {".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png", ".txt"}
ALLOWED_MIME_TYPES: Set[str] = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
    "text/plain",
}

DOCX_MIME_TYPE: str = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


# ============================================================================
# Letters
# ============================================================================

class LetterType(str, Enum):
    """Letter type"""
    PETITION = "petition"
    EXPERT = "expert"


# ============================================================================
# Evaluation letters
# ============================================================================

class EvaluationDocumentType(str, Enum):
    """Type of document uploaded for an evaluation letter"""
    RESUME = "resume"
    DEGREE = "degree"
    TRANSCRIPT = "transcript"
    OTHER = "other"


# Filename keyword -> evaluation document type, checked in order
EVALUATION_DOCUMENT_KEYWORDS: List[tuple] = [
    (("resume", "cv"), EvaluationDocumentType.RESUME.value),
    (("degree", "diploma"), EvaluationDocumentType.DEGREE.value),
    (("transcript",), EvaluationDocumentType.TRANSCRIPT.value),
]

EVALUATION_LETTER_DEFAULTS: Dict[str, str] = {
    "us_equivalent_degree1": "Bachelor of Science",
    "program_length1": "4 years",
    "accreditation_body": "Ministry of Education",
    "degree_level": "undergraduate",
}


# ============================================================================
# Translation
# ============================================================================

class TranslationStatus(str, Enum):
    """Translation file status"""
    UPLOADED = "uploaded"
    OCR = "ocr"
    TRANSLATED = "translated"
    EDITED = "edited"
    COMPLETED = "completed"


# ============================================================================
# Diploma evaluation
# ============================================================================

class EvaluationStatus(str, Enum):
    """Diploma evaluation file status"""
    UPLOADED = "uploaded"
    PROCESSED = "processed"
    EVALUATED = "evaluated"
    EDITED = "edited"
    COMPLETED = "completed"


class EducationDocumentType(str, Enum):
    """Educational document kind"""
    DIPLOMA = "diploma"
    TRANSCRIPT = "transcript"


# ============================================================================
# Document verification
# ============================================================================

class Verdict(str, Enum):
    """Authenticity verdict"""
    LIKELY_AUTHENTIC = "Likely Authentic"
    POSSIBLY_FAKE = "Possibly Fake"
    INCONCLUSIVE = "Inconclusive"


VERIFICATION_BASE_SCORE: int = 85
VERIFICATION_MIN_SCORE: int = 40
VERIFICATION_MAX_SCORE: int = 99
VERIFICATION_MIN_TEXT_LENGTH: int = 50

VERIFICATION_PENALTIES: Dict[str, int] = {
    "screenshot": 15,
    "no_signature": 10,
    "no_date": 8,
    "no_institution": 12,
    "per_suspicious_pattern": 5,
}


# ============================================================================
# Orders
# ============================================================================

class PaymentResult(str, Enum):
    """Payment sheet result"""
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"


class OrderStatus(str, Enum):
    """Order status"""
    PAID = "paid"
    IN_PROGRESS = "in_progress"
    DELIVERED = "delivered"


class ServiceType(str, Enum):
    """Orderable services"""
    TRANSLATION = "translation"
    EVALUATION = "evaluation"
    EVALUATION_LETTER = "evaluation_letter"
    VERIFICATION = "verification"
