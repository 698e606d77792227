"""
Document authenticity checks (VerifyAI)

Scores an uploaded credential with text heuristics (signature, date,
issuing institution, standard phrasing) and optionally asks the model for
a second opinion.
"""
import re
from datetime import date
from typing import Any, Dict, List, Optional
from config.settings import settings
from immidraft.services.gpt_client import gpt_client
from immidraft.services.prompt_loader import prompt_loader
from immidraft.services.text_extractor import extract_text
from immidraft.types import DocumentInfo, VerificationResult
from immidraft.utils.constants import (
    Verdict,
    VERIFICATION_BASE_SCORE,
    VERIFICATION_MIN_SCORE,
    VERIFICATION_MAX_SCORE,
    VERIFICATION_MIN_TEXT_LENGTH,
    VERIFICATION_PENALTIES,
)
from immidraft.utils.exceptions import DocumentProcessingError
from immidraft.utils.helpers import format_long_date, parse_json_from_text
from immidraft.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

DEFAULT_INSTITUTION = "the issuing institution"

INSTITUTION_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"university of ([a-z\s]+)",
        r"([a-z\s]+) university",
        r"([a-z\s]+) college",
        r"college of ([a-z\s]+)",
        r"institute of ([a-z\s]+)",
        r"([a-z\s]+) institute",
        r"school of ([a-z\s]+)",
    )
]

RECIPIENT_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"this certifies that\s+([a-z\s\.]+)",
        r"awarded to\s+([a-z\s\.]+)",
        r"presented to\s+([a-z\s\.]+)",
        r"student:\s+([a-z\s\.]+)",
        r"name:\s+([a-z\s\.]+)",
    )
]
ALL_CAPS_NAME = re.compile(r"\n\s*([A-Z][A-Z\s\.]+)\s*\n")

DATE_PATTERNS = [
    re.compile(r"dated?\s*:?\s*([a-z]+\s+\d{1,2},?\s*\d{4})", re.IGNORECASE),
    re.compile(r"issued\s*:?\s*([a-z]+\s+\d{1,2},?\s*\d{4})", re.IGNORECASE),
    re.compile(r"awarded\s*:?\s*([a-z]+\s+\d{1,2},?\s*\d{4})", re.IGNORECASE),
    re.compile(r"on\s*:?\s*([a-z]+\s+\d{1,2},?\s*\d{4})", re.IGNORECASE),
    re.compile(r"(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4})"),
    re.compile(r"(\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2})"),
]

DEGREE_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"degree of\s+([a-z\s]+)",
        r"bachelor of ([a-z\s]+)",
        r"master of ([a-z\s]+)",
        r"doctor of ([a-z\s]+)",
        r"([a-z\s]+) specialization",
        r"certificate in ([a-z\s]+)",
    )
]

# (keywords in text or filename, document type), checked in order
DOCUMENT_TYPE_KEYWORDS = [
    (("diploma", "degree"), "Diploma/Degree"),
    (("transcript",), "Academic Transcript"),
    (("certificate",), "Certificate"),
    (("report",), "Report"),
]

SIGNATURE_MARKERS = ("[Signature]", "signed", "Dean", "President", "Director")
SCREENSHOT_MARKERS = ("screenshot", "screen shot", "capture")


def is_likely_screenshot(filename: str) -> bool:
    """Filename heuristic for screen captures"""
    name = (filename or "").lower()
    return any(marker in name for marker in SCREENSHOT_MARKERS)


def _first_match(patterns, text: str, group: int = 1):
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(group):
            return match
    return None


def extract_document_info(text: str, filename: str) -> DocumentInfo:
    """
    Facts about a credential pulled from its text and filename

    Every missing signature, date or institution also counts as a
    suspicious pattern, as do type-specific omissions.

    Args:
        text: extracted document text
        filename: uploaded filename

    Returns:
        DocumentInfo dict
    """
    lower_text = text.lower()
    lower_name = (filename or "").lower()
    flags: List[str] = []
    suspicious = 0

    document_type = "Unknown"
    for keywords, kind in DOCUMENT_TYPE_KEYWORDS:
        if any(keyword in lower_text or keyword in lower_name for keyword in keywords):
            document_type = kind
            break

    institution_match = _first_match(INSTITUTION_PATTERNS, text)
    institution_name = institution_match.group(0).strip() if institution_match else ""

    recipient_match = _first_match(RECIPIENT_PATTERNS, text)
    recipient_name = recipient_match.group(1).strip() if recipient_match else ""
    if not recipient_name:
        caps_match = ALL_CAPS_NAME.search(text)
        if caps_match:
            recipient_name = caps_match.group(1).strip()

    date_match = _first_match(DATE_PATTERNS, text)
    issue_date = date_match.group(1).strip() if date_match else ""

    degree_match = _first_match(DEGREE_PATTERNS, text, group=0)
    degree = degree_match.group(0).strip() if degree_match else ""

    has_signature = "signature" in lower_text or any(marker in text for marker in SIGNATURE_MARKERS)

    if len(text) < 200:
        suspicious += 1
        flags.append("Document text is unusually short")
    if not has_signature:
        suspicious += 1
        flags.append("No signature detected on document")
    if not issue_date:
        suspicious += 1
        flags.append("No issue date found on document")
    if not institution_name:
        suspicious += 1
        flags.append("No clear issuing institution identified")

    if document_type == "Diploma/Degree":
        if not any(word in lower_text for word in ("honors", "rights", "privileges")):
            suspicious += 1
            flags.append("Missing standard diploma phrasing")
        if not degree:
            suspicious += 1
            flags.append("No degree specification found")
    elif document_type == "Academic Transcript":
        if not any(word in lower_text for word in ("grade", "gpa", "credit")):
            suspicious += 1
            flags.append("Missing standard transcript elements")
    elif document_type == "Certificate":
        if not any(word in lower_text for word in ("completed", "achievement", "awarded")):
            suspicious += 1
            flags.append("Missing standard certificate phrasing")

    lines = [line for line in text.split("\n") if line.strip()]

    if "transcript" in lower_name:
        if not re.search(r"[A-F][+\-]?", text):
            flags.append("No grades found in transcript")
        if not re.search(r"student id|id number|id:", text, re.IGNORECASE):
            flags.append("No student ID found in transcript")

    if "color" in lower_name or "unusual" in lower_name:
        flags.append("Unusual color patterns detected")
        suspicious += 1

    return {
        "document_type": document_type,
        "institution_name": institution_name,
        "recipient_name": recipient_name,
        "issue_date": issue_date,
        "degree_or_certification": degree,
        "has_signature": has_signature,
        "has_date": bool(issue_date),
        "has_institution_name": bool(institution_name),
        "suspicious_patterns": suspicious,
        "specific_flags": flags,
        "key_elements": lines[:5],
    }


def score_document(info: DocumentInfo, screenshot: bool) -> int:
    """Confidence score clamped to the allowed range"""
    score = VERIFICATION_BASE_SCORE
    if screenshot:
        score -= VERIFICATION_PENALTIES["screenshot"]
    if not info["has_signature"]:
        score -= VERIFICATION_PENALTIES["no_signature"]
    if not info["has_date"]:
        score -= VERIFICATION_PENALTIES["no_date"]
    if not info["has_institution_name"]:
        score -= VERIFICATION_PENALTIES["no_institution"]
    score -= VERIFICATION_PENALTIES["per_suspicious_pattern"] * info["suspicious_patterns"]
    return max(min(score, VERIFICATION_MAX_SCORE), VERIFICATION_MIN_SCORE)


def verdict_for_score(score: int) -> str:
    if score > 85:
        return Verdict.LIKELY_AUTHENTIC.value
    if score > 70:
        return Verdict.INCONCLUSIVE.value
    return Verdict.POSSIBLY_FAKE.value


def suggested_action(verdict: str, institution: Optional[str] = None) -> str:
    institution = institution or DEFAULT_INSTITUTION
    if verdict == Verdict.LIKELY_AUTHENTIC.value:
        return (
            f"Document appears authentic, but verification with {institution} "
            f"is recommended for complete certainty"
        )
    if verdict == Verdict.POSSIBLY_FAKE.value:
        return f"Contact {institution} to verify the document's authenticity"
    return f"Additional verification required. Consider contacting {institution}"


def generate_verification_email(
    document_name: str,
    document_type: str,
    institution: Optional[str] = None
) -> str:
    """Registrar email asking the institution to confirm a document"""
    institution = institution or DEFAULT_INSTITUTION
    return f"""Subject: Verification Request for Document {document_name}

Date: {format_long_date()}

Dear {institution} Registrar,

I am writing to request verification of the attached document that was submitted as part of an application process. The document appears to be issued by your institution.

Document Details:
- Document Name: {document_name}
- Document Type: {document_type}
- Purported Issue Date: [Date on Document]

Could you please confirm if this document was issued by your institution to the individual named in the document? Any information you can provide regarding its authenticity would be greatly appreciated.

Thank you for your assistance in this matter.

Sincerely,
[Your Name]
[Your Position]
[Contact Information]"""


class DocumentVerificationService:
    """Runs authenticity checks on uploaded credentials"""

    def __init__(self):
        self.gpt_client = gpt_client

    def review_with_ai(self, text: str, document_name: str) -> Optional[Dict[str, Any]]:
        """
        Model opinion on the document

        Returns:
            parsed review, or None when the call fails or times out
        """
        prompt = prompt_loader.render("review", "verification", document_name=document_name, text=text)
        try:
            response = self.gpt_client.chat_completion(
                messages=[{"role": "user", "content": prompt}],
                temperature=0.2,
                response_format={"type": "json_object"},
                timeout=settings.verification_ai_timeout_seconds
            )
        except Exception as e:
            logger.warning(f"AI review failed, keeping heuristic result: {str(e)}")
            return None

        review = parse_json_from_text(response["content"] or "")
        if review is None:
            logger.warning(f"AI review returned no JSON: {document_name}")
        return review

    @log_execution_time()
    def verify_document(
        self,
        document_name: str,
        content: bytes,
        mime_type: Optional[str] = None,
        use_ai: Optional[bool] = None
    ) -> VerificationResult:
        """
        Check a document for signs of forgery

        Args:
            document_name: uploaded filename
            content: file bytes
            mime_type: MIME type
            use_ai: run the model review (defaults to settings)

        Returns:
            VerificationResult dict
        """
        logger.info(f"Verifying document: {document_name}")

        try:
            text = extract_text(content, document_name, mime_type)
        except DocumentProcessingError as e:
            logger.warning(f"No text extracted for verification: {str(e)}")
            text = ""

        if len(text) < VERIFICATION_MIN_TEXT_LENGTH:
            return {
                "verdict": Verdict.INCONCLUSIVE.value,
                "confidence_score": 0,
                "flags": ["Insufficient text extracted from document"],
                "suggested_action": "Please upload a clearer image or a different document format",
            }

        info = extract_document_info(text, document_name)
        screenshot = is_likely_screenshot(document_name)
        score = score_document(info, screenshot)
        verdict = verdict_for_score(score)

        flags: List[str] = []
        if screenshot:
            flags.append("Document appears to be a screenshot rather than an original")
        if len(text) < 100:
            flags.append("Document contains minimal text content")
        for flag in info["specific_flags"]:
            if flag not in flags:
                flags.append(flag)

        today = date.today().isoformat()
        result: VerificationResult = {
            "verdict": verdict,
            "confidence_score": score,
            "flags": flags,
            "suggested_action": suggested_action(verdict, info["institution_name"]),
            "email_template": generate_verification_email(
                document_name, mime_type or info["document_type"], info["institution_name"]
            ),
            "metadata_analysis": {
                "creation_date": today,
                "modification_date": today,
                "software": "Screenshot Tool" if screenshot else "Unknown",
                "device": "Unknown",
                "suspicious": screenshot or len(flags) > 2,
            },
            "extracted_info": {
                "document_type": info["document_type"],
                "institution_name": info["institution_name"] or "Unknown",
                "recipient_name": info["recipient_name"] or "Unknown",
                "issue_date": info["issue_date"] or "Not found",
                "degree_or_certification": info["degree_or_certification"] or "Not specified",
                "key_elements": info["key_elements"],
            },
        }

        if settings.verification_ai_enabled if use_ai is None else use_ai:
            review = self.review_with_ai(text, document_name)
            if review:
                result["ai_review"] = review
                for flag in review.get("red_flags") or []:
                    if flag not in flags:
                        flags.append(str(flag))

        logger.info(f"Verification result: {document_name} -> {verdict} ({score})")
        return result


# Global document verification service instance
document_verification_service = DocumentVerificationService()
