"""
Document category keywords
Ordered keyword rules used to bucket uploaded documents into case categories
"""
from typing import Dict, Any


# Evaluated in insertion order; the first category with a matching keyword wins
CATEGORY_KEYWORDS: Dict[str, Dict[str, Any]] = {
    "resume": {
        "keywords": ["resume", "cv", "curriculum vitae"],
        "title": "1 - Resume",
        "description": "Resume or CV of the beneficiary"
    },
    "degree": {
        "keywords": ["degree", "diploma", "transcript"],
        "title": "2 - Degree & Diplomas",
        "description": "Academic degrees, diplomas and transcripts"
    },
    "license": {
        "keywords": ["license", "licence", "membership"],
        "title": "3 - License & Membership",
        "description": "Professional licenses and association memberships"
    },
    "employment": {
        "keywords": ["employment", "offer letter", "pay stub", "payslip", "contract"],
        "title": "4 - Employment Records",
        "description": "Employment verification, contracts and pay records"
    },
    "support": {
        "keywords": ["recommendation", "support", "reference", "letter"],
        "title": "5 - Support Letters",
        "description": "Expert and recommendation letters"
    },
    "recognition": {
        "keywords": ["award", "prize", "certificate", "recognition", "honor"],
        "title": "6 - Recognitions",
        "description": "Awards, prizes and certificates of recognition"
    },
    "media": {
        "keywords": ["press", "media", "news", "article", "interview"],
        "title": "7 - Press Media",
        "description": "Published material about the beneficiary"
    },
}

# Category used when no keyword matches
DEFAULT_CATEGORY: str = "resume"


def get_category_title(category: str) -> str:
    """Display title for a category key"""
    config = CATEGORY_KEYWORDS.get(category, {})
    return config.get("title", category)
