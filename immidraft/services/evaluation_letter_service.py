"""
Credential evaluation letters (EvalLetterAI)

Collects a client's resume/degree/transcript files, extracts the evaluation
fields with the model, and renders the evaluation letter template as text
or DOCX.
"""
import io
import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from docx import Document as DocxDocument
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import EvaluationLetter, EvaluationLetterDocument
from immidraft.services.document_processor import document_processor
from immidraft.services.prompt_loader import prompt_loader
from immidraft.services.storage import storage, build_object_path
from immidraft.services.text_extractor import extract_text
from immidraft.utils.constants import (
    EvaluationDocumentType,
    EVALUATION_DOCUMENT_KEYWORDS,
    EVALUATION_LETTER_DEFAULTS,
)
from immidraft.utils.exceptions import ResourceNotFoundError, ValidationError
from immidraft.utils.helpers import clean_ai_json, format_long_date, strip_control_chars
from immidraft.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

TEMPLATE_FILE = Path(__file__).parent.parent / "templates" / "evaluation_letter.txt"

ADDITIONAL_DEGREE_BLOCK = re.compile(r"\{\{#ADDITIONAL_DEGREE\}\}([\s\S]*?)\{\{/ADDITIONAL_DEGREE\}\}")
WORK_EXPERIENCE_BLOCK = re.compile(r"\{\{#WORK_EXPERIENCE_SUMMARY\}\}[\s\S]*?\{\{/WORK_EXPERIENCE_SUMMARY\}\}")
PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def guess_document_type(filename: str) -> str:
    """
    Evaluation document type from a filename

    resume/cv -> resume, degree/diploma -> degree, transcript -> transcript,
    anything else -> other.
    """
    name = (filename or "").lower()
    for keywords, document_type in EVALUATION_DOCUMENT_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return document_type
    return EvaluationDocumentType.OTHER.value


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def sanitize_extracted_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep only explicitly extracted values, as strings

    Missing or null values become "". A missing additional degree stays None.
    """
    data = data if isinstance(data, dict) else {}
    primary = data.get("primaryDegree") or {}
    additional = data.get("additionalDegree")
    work_experience = data.get("workExperience")

    sanitized_additional = None
    if isinstance(additional, dict) and any(value for value in additional.values()):
        sanitized_additional = {
            "name": _as_text(additional.get("name")),
            "university": _as_text(additional.get("university")),
            "graduationYear": _as_text(additional.get("graduationYear")),
            "equivalent": _as_text(additional.get("equivalent")),
            "field": _as_text(additional.get("field")),
        }

    return {
        "fullName": _as_text(data.get("fullName")),
        "fieldOfExpertise": _as_text(data.get("fieldOfExpertise")),
        "yearsExperience": _as_text(data.get("yearsExperience")),
        "primaryDegree": {
            "name": _as_text(primary.get("name")),
            "university": _as_text(primary.get("university")),
            "country": _as_text(primary.get("country")),
            "graduationYear": _as_text(primary.get("graduationYear")),
            "equivalent": _as_text(primary.get("equivalent")),
            "field": _as_text(primary.get("field")),
        },
        "additionalDegree": sanitized_additional,
        "workExperience": [str(item) for item in work_experience] if isinstance(work_experience, list) else [],
    }


def parse_extraction_response(response: str) -> Dict[str, Any]:
    """
    Decode the model's extraction output

    Tries the cleaned response, then the first ``{...}`` block. Gives an
    empty structure when neither parses.
    """
    try:
        return json.loads(clean_ai_json(response))
    except json.JSONDecodeError:
        logger.warning("Extraction response is not valid JSON, trying embedded object")

    match = re.search(r"\{[\s\S]*\}", response or "")
    if match:
        try:
            return json.loads(clean_ai_json(match.group(0)))
        except json.JSONDecodeError:
            logger.warning("Embedded extraction object is not valid JSON")

    return {}


def render_letter_text(
    template: str,
    letter: Dict[str, Any],
    current_date: Optional[datetime] = None
) -> str:
    """
    Fill the evaluation letter template

    Supports ``{{NAME}}`` placeholders, the conditional
    ``{{#ADDITIONAL_DEGREE}}...{{/ADDITIONAL_DEGREE}}`` block and the
    ``{{#WORK_EXPERIENCE_SUMMARY}}`` block rendered as bullet lines.

    Args:
        template: template text
        letter: serialized evaluation letter
        current_date: date printed on the letter (defaults to today)

    Returns:
        rendered letter text
    """
    def value(key: str) -> str:
        return _as_text(letter.get(key))

    values = {
        "CURRENT_DATE": format_long_date(current_date),
        "CLIENTNAME": value("client_name"),
        "UNIVERSITY": value("university"),
        "COUNTRY": value("country"),
        "BACHELOR_DEGREE": value("bachelor_degree"),
        "DEGREE_DATE1": value("degree_date1"),
        "US_EQUIVALENT_DEGREE1": value("us_equivalent_degree1") or EVALUATION_LETTER_DEFAULTS["us_equivalent_degree1"],
        "UNIVERSITY_LOCATION": value("university_location") or value("country"),
        "FIELD_OF_STUDY": value("field_of_study") or value("specialty"),
        "PROGRAM_LENGTH1": value("program_length1") or EVALUATION_LETTER_DEFAULTS["program_length1"],
        "YEARS": value("years"),
        "SPECIALTY": value("specialty"),
        "ACCREDITATION_BODY": value("accreditation_body") or EVALUATION_LETTER_DEFAULTS["accreditation_body"],
        "DEGREE_LEVEL": value("degree_level") or EVALUATION_LETTER_DEFAULTS["degree_level"],
    }
    additional_values = {
        "ADDITIONAL_DEGREE": "true",
        "UNIVERSITY2": value("university2"),
        "DEGREE_DATE2": value("degree_date2"),
        "US_EQUIVALENT_DEGREE2": value("us_equivalent_degree2"),
        "UNIVERSITY2_LOCATION": value("university2_location"),
        "FIELD_OF_STUDY2": value("field_of_study2"),
        "PROGRAM_LENGTH2": value("program_length2"),
    }

    if letter.get("additional_degree"):
        result = ADDITIONAL_DEGREE_BLOCK.sub(lambda match: match.group(1), template)
        values.update(additional_values)
    else:
        result = ADDITIONAL_DEGREE_BLOCK.sub("", template)

    work_experience = letter.get("work_experience_summary") or []
    values["WORK_EXPERIENCE_BULLETS"] = "\n".join(f"• {item}" for item in work_experience)
    result = WORK_EXPERIENCE_BLOCK.sub("{{WORK_EXPERIENCE_BULLETS}}", result)

    # One pass, so placeholders inside user values stay literal
    return PLACEHOLDER.sub(lambda match: values.get(match.group(1), match.group(0)), result)


def build_docx(text: str, title: Optional[str] = None) -> bytes:
    """
    Render plain text to a DOCX document, one paragraph per line

    Args:
        text: letter text
        title: optional heading

    Returns:
        DOCX bytes
    """
    document = DocxDocument()
    if title:
        document.add_heading(strip_control_chars(title), level=1)

    for line in strip_control_chars(text).splitlines():
        if line.startswith("• "):
            document.add_paragraph(line[2:], style="List Bullet")
        else:
            document.add_paragraph(line)

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class EvaluationLetterService:
    """Evaluation letter records, source documents and rendering"""

    def __init__(self, template_path: Path = TEMPLATE_FILE):
        self.template_path = template_path

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def create_evaluation_letter(self, data: Dict[str, Any]) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            letter = EvaluationLetter(client_name="", work_experience_summary=[], additional_degree=False)
            letter.apply_changes(data, protected={"extracted_text", "ai_summary", "final_letter_path"})
            session.add(letter)
            session.flush()
            logger.info(f"Evaluation letter created: {letter.id}")
            return letter.to_json()

    def get_evaluation_letter(self, letter_id: str, include_documents: bool = True) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            letter = session.get(EvaluationLetter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("EvaluationLetter", letter_id)
            result = letter.to_json()
            if include_documents:
                result["documents"] = [
                    self._document_json(document)
                    for document in sorted(letter.documents, key=lambda d: d.created_at)
                ]
            return result

    def list_evaluation_letters(self) -> List[Dict[str, Any]]:
        with db_manager.get_db_session() as session:
            letters = session.query(EvaluationLetter).order_by(
                EvaluationLetter.updated_at.desc()
            ).all()
            return [letter.to_json() for letter in letters]

    def update_evaluation_letter(self, letter_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            letter = session.get(EvaluationLetter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("EvaluationLetter", letter_id)
            letter.apply_changes(changes, protected={"extracted_text", "ai_summary", "final_letter_path"})
            session.flush()
            return letter.to_json()

    def delete_evaluation_letter(self, letter_id: str) -> None:
        with db_manager.get_db_session() as session:
            letter = session.get(EvaluationLetter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("EvaluationLetter", letter_id)
            paths = [document.storage_path for document in letter.documents]
            session.delete(letter)

        for path in paths:
            storage.delete(settings.evaluation_letters_bucket, path)
        logger.info(f"Evaluation letter deleted: {letter_id}")

    # ------------------------------------------------------------------
    # Source documents
    # ------------------------------------------------------------------

    @staticmethod
    def _document_json(document: EvaluationLetterDocument) -> Dict[str, Any]:
        result = document.to_json()
        result.pop("extracted_text", None)
        result["has_text"] = bool(document.extracted_text)
        return result

    def upload_document(
        self,
        letter_id: str,
        filename: str,
        content: bytes,
        mime_type: Optional[str] = None,
        document_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Store a source document for an evaluation letter

        The document type is guessed from the filename when not given.
        """
        if not content:
            raise ValidationError("file is empty", "file")
        self.get_evaluation_letter(letter_id, include_documents=False)

        object_path = build_object_path(letter_id, filename)
        storage.upload(settings.evaluation_letters_bucket, object_path, content)

        with db_manager.get_db_session() as session:
            document = EvaluationLetterDocument(
                evaluation_letter_id=letter_id,
                file_name=filename,
                file_type=mime_type or "application/octet-stream",
                file_size=len(content),
                storage_path=object_path,
                document_type=document_type or guess_document_type(filename),
                processed=False,
            )
            session.add(document)
            session.flush()
            logger.info(f"Evaluation document uploaded: {document.id} ({document.document_type})")
            return self._document_json(document)

    def process_documents(self, letter_id: str) -> Dict[str, Any]:
        """
        Extract text from every unprocessed source document

        A failing document records its error and does not stop the others.

        Returns:
            dict with ``processed`` and ``failed`` counts and the documents
        """
        self.get_evaluation_letter(letter_id, include_documents=False)
        processed, failed = 0, 0

        with db_manager.get_db_session() as session:
            documents = session.query(EvaluationLetterDocument).filter(
                EvaluationLetterDocument.evaluation_letter_id == letter_id,
                EvaluationLetterDocument.processed.is_(False)
            ).all()

            for document in documents:
                try:
                    content = storage.download(settings.evaluation_letters_bucket, document.storage_path)
                    document.extracted_text = extract_text(content, document.file_name, document.file_type)
                    document.processed = True
                    document.processing_error = None
                    processed += 1
                except Exception as e:
                    logger.error(f"Evaluation document failed: {document.id} - {str(e)}")
                    document.processing_error = str(e)
                    failed += 1

            session.flush()
            results = [self._document_json(document) for document in documents]

        logger.info(f"Processed evaluation documents for {letter_id}: ok={processed}, failed={failed}")
        return {"processed": processed, "failed": failed, "documents": results}

    # ------------------------------------------------------------------
    # AI extraction
    # ------------------------------------------------------------------

    @log_execution_time()
    def extract_data_with_ai(self, letter_id: str) -> Dict[str, Any]:
        """
        Fill the evaluation letter fields from its processed documents

        Returns:
            dict with the sanitized ``extracted_data`` and the updated ``letter``,
            or a ``message`` when nothing has been processed yet
        """
        with db_manager.get_db_session() as session:
            letter = session.get(EvaluationLetter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("EvaluationLetter", letter_id)
            documents = [document for document in letter.documents if document.processed]
            combined_text = "\n".join(
                f"Document: {document.file_name}\n{document.extracted_text or 'No text extracted'}\n\n"
                for document in documents
            )

        if not documents:
            return {"message": "No processed documents found"}

        instruction = prompt_loader.render("data_extraction", "evaluation_letter")
        response = document_processor.run_custom_prompt(combined_text, instruction, temperature=0.0)
        sanitized = sanitize_extracted_data(parse_extraction_response(response))

        primary = sanitized["primaryDegree"]
        additional = sanitized["additionalDegree"] or {}
        changes = {
            "client_name": sanitized["fullName"],
            "university": primary["university"],
            "country": primary["country"],
            "bachelor_degree": primary["name"],
            "degree_date1": primary["graduationYear"],
            "us_equivalent_degree1": primary["equivalent"],
            "field_of_study": primary["field"],
            "additional_degree": bool(sanitized["additionalDegree"]),
            "university2": additional.get("university", ""),
            "degree_date2": additional.get("graduationYear", ""),
            "us_equivalent_degree2": additional.get("equivalent", ""),
            "field_of_study2": additional.get("field", ""),
            "specialty": sanitized["fieldOfExpertise"],
            "years": sanitized["yearsExperience"],
            "work_experience_summary": sanitized["workExperience"],
        }

        with db_manager.get_db_session() as session:
            letter = session.get(EvaluationLetter, letter_id)
            letter.apply_changes(changes)
            letter.ai_summary = sanitized
            letter.extracted_text = {"combined_text": combined_text}
            session.flush()
            updated = letter.to_json()

        logger.info(f"Evaluation data extracted for {letter_id}")
        return {"extracted_data": sanitized, "letter": updated}

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def load_template(self) -> str:
        with open(self.template_path, "r", encoding="utf-8") as f:
            return f.read()

    def render_letter(self, letter_id: str, current_date: Optional[datetime] = None) -> str:
        letter = self.get_evaluation_letter(letter_id, include_documents=False)
        return render_letter_text(self.load_template(), letter, current_date)

    def generate_docx(self, letter_id: str) -> Dict[str, Any]:
        """
        Render the letter to DOCX and store it

        Returns:
            dict with ``file_name``, ``storage_path`` and ``content`` bytes
        """
        letter = self.get_evaluation_letter(letter_id, include_documents=False)
        text = render_letter_text(self.load_template(), letter)
        content = build_docx(text)

        client = re.sub(r"\s+", "_", letter.get("client_name") or "Client")
        file_name = f"Evaluation_Letter_{client}.docx"
        object_path = build_object_path(letter_id, file_name)
        storage.upload(settings.reports_bucket, object_path, content)

        with db_manager.get_db_session() as session:
            record = session.get(EvaluationLetter, letter_id)
            record.final_letter_path = object_path

        logger.info(f"Evaluation letter generated: {letter_id} -> {object_path}")
        return {"file_name": file_name, "storage_path": object_path, "content": content}


# Global evaluation letter service instance
evaluation_letter_service = EvaluationLetterService()
