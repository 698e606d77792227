"""
Document storage and record management
"""
from typing import Any, Dict, List, Optional, Tuple
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import Document
from immidraft.services.document_processor import document_processor
from immidraft.services.storage import storage, build_object_path
from immidraft.utils.constants import DocumentStatus
from immidraft.utils.exceptions import ResourceNotFoundError, ValidationError
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentService:
    """Uploads, lists and removes documents"""

    def upload_document(
        self,
        filename: str,
        content: bytes,
        mime_type: Optional[str] = None,
        case_id: Optional[str] = None,
        letter_id: Optional[str] = None,
        tags: Optional[List[str]] = None,
        criteria: Optional[List[str]] = None,
        process: bool = True
    ) -> Dict[str, Any]:
        """
        Store a file, insert its record and optionally run document-AI processing

        Args:
            filename: sanitized original filename
            content: file bytes
            mime_type: MIME type
            case_id: owning case
            letter_id: owning letter
            tags: user tags
            criteria: criteria titles the document supports
            process: run processing right away

        Returns:
            serialized document (processed when ``process`` is set)
        """
        if not content:
            raise ValidationError("file is empty", "file")

        prefix = case_id or letter_id or "unassigned"
        object_path = build_object_path(prefix, filename)
        storage.upload(settings.documents_bucket, object_path, content)

        with db_manager.get_db_session() as session:
            document = Document(
                case_id=case_id,
                letter_id=letter_id,
                name=filename,
                size=len(content),
                type=mime_type or "application/octet-stream",
                storage_path=object_path,
                tags=list(tags or []),
                criteria=list(criteria or []),
                ai_tags=[],
                status=DocumentStatus.UPLOADED.value,
            )
            session.add(document)
            session.flush()
            document_id = document.id
            result = document.to_json()

        logger.info(f"Document uploaded: id={document_id}, name={filename}, size={len(content)}")

        if process:
            result = document_processor.process_document(document_id)
        return result

    def get_document(self, document_id: str) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            document = session.get(Document, document_id)
            if document is None:
                raise ResourceNotFoundError("Document", document_id)
            return document.to_json()

    def list_documents(
        self,
        case_id: Optional[str] = None,
        letter_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Documents newest first

        Returns:
            (serialized documents, total count before paging)
        """
        with db_manager.get_db_session() as session:
            query = session.query(Document)
            if case_id:
                query = query.filter(Document.case_id == case_id)
            if letter_id:
                query = query.filter(Document.letter_id == letter_id)
            if status:
                query = query.filter(Document.status == status)

            total_count = query.count()
            documents = query.order_by(
                Document.created_at.desc()
            ).offset(offset).limit(limit).all()
            return [document.to_json() for document in documents], total_count

    def update_document(self, document_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Overwrite user-editable fields (category, tags, criteria, name)"""
        with db_manager.get_db_session() as session:
            document = session.get(Document, document_id)
            if document is None:
                raise ResourceNotFoundError("Document", document_id)
            document.apply_changes(
                changes,
                protected={"storage_path", "size", "status", "extracted_text", "case_id"}
            )
            session.flush()
            return document.to_json()

    def delete_document(self, document_id: str) -> None:
        """Delete the record and its stored file"""
        with db_manager.get_db_session() as session:
            document = session.get(Document, document_id)
            if document is None:
                raise ResourceNotFoundError("Document", document_id)
            storage_path = document.storage_path
            session.delete(document)

        storage.delete(settings.documents_bucket, storage_path)
        logger.info(f"Document deleted: {document_id}")


# Global document service instance
document_service = DocumentService()
