"""
Diploma and transcript evaluation (EvaluateAI)

Detects whether an educational document is a diploma or a transcript,
extracts its structured fields and asks the model for the US equivalency.
"""
import io
import re
from pathlib import Path
from typing import Any, Dict, List, Optional
from docx import Document as DocxDocument
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import EvaluationFile
from immidraft.services.gpt_client import gpt_client
from immidraft.services.prompt_loader import prompt_loader
from immidraft.services.storage import storage, build_object_path
from immidraft.services.text_extractor import extract_text
from immidraft.utils.constants import EvaluationStatus, EducationDocumentType
from immidraft.utils.exceptions import ResourceNotFoundError, ValidationError, InvalidInputError
from immidraft.utils.helpers import parse_json_from_text, format_long_date, strip_control_chars
from immidraft.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

TRANSCRIPT_INDICATORS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"course(?:s)?\s+(?:list|catalog|schedule)",
        r"grade(?:s)?\s+(?:received|earned|awarded)",
        r"credit(?:s)?\s+(?:hour|earned|attempted)",
        r"transcript\s+of\s+(?:record|academic)",
        r"semester|quarter|term",
        r"gpa|grade\s+point\s+average",
        r"academic\s+record",
        r"course\s+number",
        r"department\s+code",
    )
]

STRUCTURED_FIELDS = [
    ("Name", "name"),
    ("Degree", "degree"),
    ("Field of Study", "field_of_study"),
    ("University", "university"),
    ("Graduation Date", "graduation_date"),
    ("Diploma Issue Date", "diploma_issue_date"),
    ("Birth Date", "birth_date"),
    ("Birthplace", "birthplace"),
]

NO_EQUIVALENCY = "Unable to determine US equivalency"


def detect_document_type(text: str) -> str:
    """
    Diploma or transcript

    Any transcript indicator (courses, grades, credits, GPA, terms) makes
    the document a transcript.
    """
    for pattern in TRANSCRIPT_INDICATORS:
        if pattern.search(text or ""):
            return EducationDocumentType.TRANSCRIPT.value
    return EducationDocumentType.DIPLOMA.value


def format_structured_data(structured: Dict[str, Any]) -> str:
    """Plain-text listing of extracted fields and courses for the equivalency prompt"""
    lines = [f"{label}: {structured.get(key) or 'Unknown'}" for label, key in STRUCTURED_FIELDS]

    courses = structured.get("courses") or []
    if courses:
        lines.append("")
        lines.append("Courses:")
        for i, course in enumerate(courses, 1):
            line = (
                f"{i}. {course.get('course_name', 'Unknown')} - "
                f"Grade: {course.get('grade_received', 'N/A')}, "
                f"Credits: {course.get('credits', 'N/A')}"
            )
            if course.get("semester_or_year"):
                line += f", {course['semester_or_year']}"
            lines.append(line)

    return "\n".join(lines)


class DiplomaEvaluationService:
    """Diploma/transcript evaluation files"""

    def __init__(self):
        self.gpt_client = gpt_client

    # ------------------------------------------------------------------
    # AI steps
    # ------------------------------------------------------------------

    def extract_structured_data(self, text: str, document_type: str) -> Optional[Dict[str, Any]]:
        """
        Structured fields of a diploma or transcript

        Returns:
            parsed dict, or None when the model gives no usable JSON
        """
        instructions = prompt_loader.load_prompt(f"{document_type}_extraction", "evaluation")
        if instructions is None:
            raise InvalidInputError(f"unsupported document type: {document_type}", "document_type")
        prompt = instructions.strip() + "\n\n" + prompt_loader.render("extraction_format", "evaluation", text=text)

        try:
            response = self.gpt_client.chat_completion(
                messages=[{"role": "user", "content": prompt}],
                temperature=0.2,
                response_format={"type": "json_object"}
            )
        except Exception as e:
            logger.error(f"Structured extraction failed: {str(e)}")
            return None

        structured = parse_json_from_text(response["content"] or "")
        if structured is None:
            logger.warning("Structured extraction returned no JSON")
            return None

        structured.setdefault("document_type", document_type)
        return structured

    def determine_us_equivalency(
        self,
        text: str,
        structured: Optional[Dict[str, Any]] = None,
        document_type: Optional[str] = None
    ) -> str:
        """
        US equivalency statement for the document

        Errors are reported as text so the evaluator can edit them away.
        """
        document_type = document_type or (structured or {}).get("document_type") or detect_document_type(text)
        source = text
        if structured:
            source = f"{text}\n\nExtracted information:\n{format_structured_data(structured)}"

        try:
            prompt = prompt_loader.render(f"{document_type}_equivalency", "evaluation", text=source)
            result = self.gpt_client.complete(prompt, temperature=0.3)
        except Exception as e:
            logger.error(f"US equivalency failed: {str(e)}")
            return f"Error generating US equivalency: {str(e)}"

        return result or NO_EQUIVALENCY

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    @staticmethod
    def _get(session, file_id: str) -> EvaluationFile:
        record = session.get(EvaluationFile, file_id)
        if record is None:
            raise ResourceNotFoundError("EvaluationFile", file_id)
        return record

    def upload_document(
        self,
        filename: str,
        content: bytes,
        mime_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Store a diploma or transcript and extract its text

        The document type is detected from the extracted text.
        """
        if not content:
            raise ValidationError("file is empty", "file")

        object_path = build_object_path("source", filename)
        storage.upload(settings.evaluations_bucket, object_path, content)

        try:
            text = extract_text(content, filename, mime_type)
            status = EvaluationStatus.PROCESSED.value
        except Exception as e:
            logger.warning(f"Text extraction failed for evaluation upload {filename}: {str(e)}")
            text = None
            status = EvaluationStatus.UPLOADED.value

        with db_manager.get_db_session() as session:
            record = EvaluationFile(
                filename=filename,
                file_type=mime_type or "application/octet-stream",
                file_size=len(content),
                storage_path=object_path,
                document_type=detect_document_type(text) if text else None,
                extracted_text=text,
                status=status,
            )
            session.add(record)
            session.flush()
            logger.info(f"Evaluation file uploaded: {record.id} ({record.document_type})")
            return record.to_json()

    @log_execution_time()
    def process_evaluation(self, file_id: str) -> Dict[str, Any]:
        """
        Extract structured data and the US equivalency

        Raises:
            InvalidInputError: when the file has no extracted text
        """
        record = self.get_file(file_id)
        text = record.get("extracted_text")
        if not text:
            raise InvalidInputError("no extracted text to evaluate", "extracted_text")

        document_type = record.get("document_type") or detect_document_type(text)
        structured = self.extract_structured_data(text, document_type)
        equivalency = self.determine_us_equivalency(text, structured, document_type)

        with db_manager.get_db_session() as session:
            stored = self._get(session, file_id)
            stored.document_type = document_type
            stored.structured_data = structured
            stored.us_equivalency = equivalency
            stored.status = EvaluationStatus.EVALUATED.value
            session.flush()
            logger.info(f"Evaluation completed: {file_id} ({document_type})")
            return stored.to_json()

    def update_evaluation(
        self,
        file_id: str,
        us_equivalency: Optional[str] = None,
        structured_data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Save the evaluator's edits"""
        with db_manager.get_db_session() as session:
            record = self._get(session, file_id)
            if us_equivalency is not None:
                record.us_equivalency = us_equivalency
            if structured_data is not None:
                record.structured_data = structured_data
            record.status = EvaluationStatus.EDITED.value
            session.flush()
            return record.to_json()

    def build_report_docx(self, record: Dict[str, Any]) -> bytes:
        structured = record.get("structured_data") or {}
        document = DocxDocument()
        document.add_heading("Credential Evaluation Report", level=1)
        document.add_paragraph(f"Date: {format_long_date()}")
        document.add_paragraph(strip_control_chars(f"Document: {record['filename']}"))
        document.add_paragraph(strip_control_chars(f"Document type: {record.get('document_type') or 'unknown'}"))

        document.add_heading("Credential Details", level=2)
        for line in strip_control_chars(format_structured_data(structured)).splitlines():
            if line:
                document.add_paragraph(line)

        document.add_heading("US Equivalency", level=2)
        for line in strip_control_chars(record.get("us_equivalency") or NO_EQUIVALENCY).splitlines():
            document.add_paragraph(line)

        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def generate_report(self, file_id: str) -> Dict[str, Any]:
        """
        Render the evaluation report to DOCX and mark the file completed

        Returns:
            dict with ``file_name``, ``storage_path`` and ``content``
        """
        record = self.get_file(file_id)
        if not record.get("us_equivalency"):
            raise InvalidInputError("file has not been evaluated yet", "us_equivalency")

        content = self.build_report_docx(record)
        file_name = f"{Path(record['filename']).stem}_evaluation.docx"
        object_path = build_object_path(f"evaluations/{file_id}", file_name)
        storage.upload(settings.reports_bucket, object_path, content)

        with db_manager.get_db_session() as session:
            stored = self._get(session, file_id)
            stored.report_path = object_path
            stored.status = EvaluationStatus.COMPLETED.value

        logger.info(f"Evaluation report generated: {file_id}")
        return {"file_name": file_name, "storage_path": object_path, "content": content}

    def list_files(self) -> List[Dict[str, Any]]:
        with db_manager.get_db_session() as session:
            records = session.query(EvaluationFile).order_by(EvaluationFile.uploaded_at.desc()).all()
            return [record.to_json() for record in records]

    def get_file(self, file_id: str) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            return self._get(session, file_id).to_json()

    def delete_file(self, file_id: str) -> None:
        with db_manager.get_db_session() as session:
            record = self._get(session, file_id)
            storage_path, report_path = record.storage_path, record.report_path
            session.delete(record)

        storage.delete(settings.evaluations_bucket, storage_path)
        if report_path:
            storage.delete(settings.reports_bucket, report_path)
        logger.info(f"Evaluation file deleted: {file_id}")


# Global diploma evaluation service instance
diploma_evaluation_service = DiplomaEvaluationService()
