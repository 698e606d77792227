"""
Document translation (TranslateAI)

upload -> ocr -> translated -> edited -> completed
"""
import io
import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from docx import Document as DocxDocument
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import TranslationFile
from immidraft.services.gpt_client import gpt_client
from immidraft.services.prompt_loader import prompt_loader
from immidraft.services.storage import storage, build_object_path
from immidraft.services.text_extractor import extract_text
from immidraft.utils.constants import TranslationStatus, DOCX_MIME_TYPE
from immidraft.utils.exceptions import ResourceNotFoundError, ValidationError, InvalidInputError
from immidraft.utils.helpers import format_long_date, strip_control_chars
from immidraft.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

REPORT_FORMATS = ("docx", "json")

CERTIFICATION_STATEMENT = (
    "I certify that the above is a complete and accurate translation of the "
    "original document to the best of my knowledge and ability."
)


class TranslationService:
    """Stores source documents and produces reviewed translations"""

    def __init__(self):
        self.gpt_client = gpt_client

    @staticmethod
    def _get(session, file_id: str) -> TranslationFile:
        record = session.get(TranslationFile, file_id)
        if record is None:
            raise ResourceNotFoundError("TranslationFile", file_id)
        return record

    def upload_document(
        self,
        filename: str,
        content: bytes,
        mime_type: Optional[str] = None,
        language_from: Optional[str] = None,
        language_to: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Store a source document and extract its text

        Extraction failures leave the file in ``uploaded`` state with no text.

        Returns:
            serialized translation file
        """
        if not content:
            raise ValidationError("file is empty", "file")

        object_path = build_object_path("source", filename)
        storage.upload(settings.translations_bucket, object_path, content)

        try:
            ocr_text = extract_text(content, filename, mime_type)
            status = TranslationStatus.OCR.value
        except Exception as e:
            logger.warning(f"Text extraction failed for translation upload {filename}: {str(e)}")
            ocr_text = None
            status = TranslationStatus.UPLOADED.value

        with db_manager.get_db_session() as session:
            record = TranslationFile(
                filename=filename,
                file_type=mime_type or "application/octet-stream",
                file_size=len(content),
                storage_path=object_path,
                ocr_text=ocr_text,
                language_from=language_from or settings.default_source_language,
                language_to=language_to or settings.default_target_language,
                status=status,
            )
            session.add(record)
            session.flush()
            logger.info(f"Translation file uploaded: {record.id} ({status})")
            return record.to_json()

    def translate_text(self, text: str, language_to: str, language_from: Optional[str] = None) -> str:
        """
        Translate text with the model

        API failures are returned as ``[Translation Error: ...]`` text so the
        reviewer sees them in the editor.
        """
        source_clause = "" if not language_from or language_from == "auto" else f" from {language_from}"
        prompt = prompt_loader.render(
            "translate", "translation",
            source_clause=source_clause,
            language_to=language_to,
            text=text
        )

        try:
            return self.gpt_client.complete(prompt, temperature=0.3)
        except Exception as e:
            logger.error(f"Translation failed: {str(e)}")
            return f"[Translation Error: {str(e)}]"

    @log_execution_time()
    def translate(self, file_id: str, language_to: Optional[str] = None) -> Dict[str, Any]:
        """
        Translate a file's extracted text

        Args:
            file_id: translation file id
            language_to: overrides the target language chosen at upload

        Raises:
            InvalidInputError: when the file has no extracted text
        """
        with db_manager.get_db_session() as session:
            record = self._get(session, file_id)
            if not record.ocr_text:
                raise InvalidInputError("no extracted text to translate", "ocr_text")

            if language_to:
                record.language_to = language_to
            record.translated_text = self.translate_text(
                record.ocr_text, record.language_to, record.language_from
            )
            record.status = TranslationStatus.TRANSLATED.value
            session.flush()
            logger.info(f"Translated {file_id} -> {record.language_to}")
            return record.to_json()

    def update_translated_text(self, file_id: str, translated_text: str) -> Dict[str, Any]:
        """Save the reviewer's edits"""
        with db_manager.get_db_session() as session:
            record = self._get(session, file_id)
            record.translated_text = translated_text
            record.status = TranslationStatus.EDITED.value
            session.flush()
            return record.to_json()

    def build_report_docx(self, record: Dict[str, Any]) -> bytes:
        document = DocxDocument()
        document.add_heading("Certified Translation", level=1)
        document.add_paragraph(strip_control_chars(f"Source document: {record['filename']}"))
        document.add_paragraph(strip_control_chars(f"Translated from: {record['language_from']}"))
        document.add_paragraph(strip_control_chars(f"Translated to: {record['language_to']}"))
        document.add_paragraph(f"Date: {format_long_date()}")

        document.add_heading("Translation", level=2)
        for line in strip_control_chars(record.get("translated_text")).splitlines():
            document.add_paragraph(line)

        document.add_heading("Certification", level=2)
        document.add_paragraph(CERTIFICATION_STATEMENT)

        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def generate_report(self, file_id: str, report_format: str = "docx") -> Dict[str, Any]:
        """
        Produce the final translation document and mark the file completed

        Args:
            file_id: translation file id
            report_format: "docx" or "json"

        Returns:
            dict with ``file_name``, ``media_type``, ``storage_path`` and ``content``
        """
        if report_format not in REPORT_FORMATS:
            raise InvalidInputError(f"format must be one of {', '.join(REPORT_FORMATS)}", "format")

        record = self.get_file(file_id)
        if not record.get("translated_text"):
            raise InvalidInputError("file has not been translated yet", "translated_text")

        stem = Path(record["filename"]).stem
        if report_format == "docx":
            content = self.build_report_docx(record)
            file_name = f"{stem}_translation.docx"
            media_type = DOCX_MIME_TYPE
        else:
            payload = {
                "filename": record["filename"],
                "language_from": record["language_from"],
                "language_to": record["language_to"],
                "original_text": record["ocr_text"],
                "translated_text": record["translated_text"],
                "date": format_long_date(),
            }
            content = json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
            file_name = f"{stem}_translation.json"
            media_type = "application/json"

        object_path = build_object_path(f"translations/{file_id}", file_name)
        storage.upload(settings.reports_bucket, object_path, content)

        with db_manager.get_db_session() as session:
            stored = self._get(session, file_id)
            stored.report_path = object_path
            stored.status = TranslationStatus.COMPLETED.value

        logger.info(f"Translation report generated: {file_id} ({report_format})")
        return {
            "file_name": file_name,
            "media_type": media_type,
            "storage_path": object_path,
            "content": content,
        }

    def list_files(self) -> List[Dict[str, Any]]:
        with db_manager.get_db_session() as session:
            records = session.query(TranslationFile).order_by(TranslationFile.uploaded_at.desc()).all()
            return [record.to_json() for record in records]

    def get_file(self, file_id: str) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            return self._get(session, file_id).to_json()

    def delete_file(self, file_id: str) -> None:
        with db_manager.get_db_session() as session:
            record = self._get(session, file_id)
            storage_path, report_path = record.storage_path, record.report_path
            session.delete(record)

        storage.delete(settings.translations_bucket, storage_path)
        if report_path:
            storage.delete(settings.reports_bucket, report_path)
        logger.info(f"Translation file deleted: {file_id}")


# Global translation service instance
translation_service = TranslationService()
