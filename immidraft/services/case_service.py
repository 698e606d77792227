"""
Case workspace service
"""
from typing import Any, Dict, List, Optional, Tuple
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import Case, Document
from immidraft.services.criteria_service import criteria_service
from immidraft.services.document_categorizer import group_by_category
from immidraft.services.document_service import document_service
from immidraft.services.storage import storage
from immidraft.utils.exceptions import ResourceNotFoundError, InvalidInputError
from immidraft.utils.logger import get_logger
from config.category_keywords import CATEGORY_KEYWORDS

logger = get_logger(__name__)


class CaseService:
    """CRUD and document handling for visa petition cases"""

    def create_case(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a case

        Args:
            data: case fields (client_first_name, client_last_name and visa_type required)

        Returns:
            serialized case
        """
        for field in ("client_first_name", "client_last_name", "visa_type"):
            if not (data.get(field) or "").strip():
                raise InvalidInputError(f"{field} is required", field)

        with db_manager.get_db_session() as session:
            case = Case()
            case.apply_changes(data)
            if not case.status:
                case.status = "draft"
            session.add(case)
            session.flush()
            logger.info(f"Case created: {case.id} ({case.visa_type})")
            return case.to_json()

    def get_case(self, case_id: str) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            case = session.get(Case, case_id)
            if case is None:
                raise ResourceNotFoundError("Case", case_id)
            return case.to_json()

    def list_cases(
        self,
        status: Optional[str] = None,
        visa_type: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Cases newest first

        Returns:
            (serialized cases with document counts, total count before paging)
        """
        with db_manager.get_db_session() as session:
            query = session.query(Case)
            if status:
                query = query.filter(Case.status == status)
            if visa_type:
                query = query.filter(Case.visa_type == visa_type)

            total_count = query.count()
            cases = query.order_by(Case.created_at.desc()).offset(offset).limit(limit).all()

            items = []
            for case in cases:
                item = case.to_json()
                item["document_count"] = len(case.documents)
                items.append(item)
            return items, total_count

    def update_case(self, case_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            case = session.get(Case, case_id)
            if case is None:
                raise ResourceNotFoundError("Case", case_id)
            case.apply_changes(changes)
            session.flush()
            logger.info(f"Case updated: {case_id}")
            return case.to_json()

    def delete_case(self, case_id: str) -> None:
        """Delete a case, its documents and their stored files"""
        with db_manager.get_db_session() as session:
            case = session.get(Case, case_id)
            if case is None:
                raise ResourceNotFoundError("Case", case_id)
            paths = [document.storage_path for document in case.documents]
            session.delete(case)

        for path in paths:
            storage.delete(settings.documents_bucket, path)
        logger.info(f"Case deleted: {case_id} ({len(paths)} documents)")

    def add_document_to_case(
        self,
        case_id: str,
        filename: str,
        content: bytes,
        mime_type: Optional[str] = None,
        tags: Optional[List[str]] = None,
        criteria: Optional[List[str]] = None,
        process: bool = True
    ) -> Dict[str, Any]:
        """
        Upload a document into a case and run document-AI processing

        Returns:
            serialized document
        """
        self.get_case(case_id)
        return document_service.upload_document(
            filename=filename,
            content=content,
            mime_type=mime_type,
            case_id=case_id,
            tags=tags,
            criteria=criteria,
            process=process,
        )

    def list_case_documents(self, case_id: str) -> List[Dict[str, Any]]:
        """Case documents newest first"""
        self.get_case(case_id)
        documents, _ = document_service.list_documents(case_id=case_id, limit=1000)
        return documents

    def save_document_categories(
        self,
        case_id: str,
        assignments: Dict[str, str]
    ) -> List[Dict[str, Any]]:
        """
        Store categories chosen in the document sorter

        Args:
            case_id: case id
            assignments: document id -> category key

        Returns:
            updated documents
        """
        unknown = {category for category in assignments.values() if category not in CATEGORY_KEYWORDS}
        if unknown:
            raise InvalidInputError(f"unknown categories: {', '.join(sorted(unknown))}", "category")

        with db_manager.get_db_session() as session:
            documents = session.query(Document).filter(
                Document.case_id == case_id,
                Document.id.in_(list(assignments.keys()))
            ).all()

            found = {document.id for document in documents}
            missing = set(assignments) - found
            if missing:
                raise ResourceNotFoundError("Document", ", ".join(sorted(missing)))

            for document in documents:
                document.category = assignments[document.id]
            session.flush()
            logger.info(f"Saved categories for {len(documents)} documents in case {case_id}")
            return [document.to_json() for document in documents]

    def get_workspace(self, case_id: str) -> Dict[str, Any]:
        """
        Case with its documents grouped by category and the criteria for its visa type
        """
        case = self.get_case(case_id)
        documents = self.list_case_documents(case_id)
        return {
            "case": case,
            "categories": group_by_category(documents),
            "criteria": criteria_service.list_criteria(case["visa_type"]),
        }


# Global case service instance
case_service = CaseService()
