"""
Document-AI processing

Extracts text from an uploaded document, asks the model for a summary and
tags, and stores the results on the document record.
"""
from typing import Any, Dict, Optional
from config.settings import settings
from immidraft.db.connection import db_manager
from immidraft.db.models import Document
from immidraft.services.document_categorizer import categorize_document
from immidraft.services.gpt_client import gpt_client
from immidraft.services.prompt_loader import prompt_loader
from immidraft.services.storage import storage
from immidraft.services.text_extractor import extract_text
from immidraft.types import DocumentAnalysis
from immidraft.utils.constants import DocumentStatus, TERMINAL_DOCUMENT_STATUSES
from immidraft.utils.exceptions import ResourceNotFoundError
from immidraft.utils.helpers import parse_json_from_text
from immidraft.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

# Characters of document text sent to the model
MAX_PROMPT_TEXT = 12000


class DocumentProcessor:
    """Runs document-AI processing"""

    def __init__(self):
        self.gpt_client = gpt_client

    def analyze_text(
        self,
        text: str,
        document_name: str,
        document_type: Optional[str] = None
    ) -> DocumentAnalysis:
        """
        Summarize a document and derive tags

        Args:
            text: extracted text
            document_name: filename shown to the model
            document_type: MIME type or caller supplied kind

        Returns:
            dict with ``summary`` and lower-cased ``tags``
        """
        prompt = prompt_loader.render(
            "analyze", "document",
            document_name=document_name,
            document_type=document_type or "unknown",
            text=text[:MAX_PROMPT_TEXT]
        )

        response = self.gpt_client.chat_completion(
            messages=[{"role": "user", "content": prompt}],
            temperature=0.2,
            max_tokens=600,
            response_format={"type": "json_object"}
        )

        parsed = parse_json_from_text(response["content"] or "")
        if parsed is None:
            logger.warning(f"Analysis response was not JSON: {document_name}")
            return {"summary": (response["content"] or "").strip(), "tags": []}

        tags = parsed.get("tags") or []
        if not isinstance(tags, list):
            tags = [tags]

        return {
            "summary": str(parsed.get("summary") or "").strip(),
            "tags": [str(tag).strip().lower() for tag in tags if str(tag).strip()],
        }

    def run_custom_prompt(
        self,
        text: str,
        prompt: str,
        temperature: float = 0.2,
        max_tokens: Optional[int] = 2000
    ) -> str:
        """
        Run a caller supplied instruction over document text

        Args:
            text: document text
            prompt: instruction placed before the text

        Returns:
            model output
        """
        full_prompt = prompt_loader.render(
            "custom", "document",
            prompt=prompt.strip(),
            text=text[:MAX_PROMPT_TEXT]
        )
        return self.gpt_client.complete(
            full_prompt,
            temperature=temperature,
            max_tokens=max_tokens
        )

    @log_execution_time()
    def process_document(self, document_id: str) -> Dict[str, Any]:
        """
        Process a stored document

        ``uploaded -> processing -> processed | error``. Documents already in
        a terminal state are returned as they are.

        Args:
            document_id: document id

        Returns:
            serialized document

        Raises:
            ResourceNotFoundError: unknown document id
        """
        with db_manager.get_db_session() as session:
            document = session.get(Document, document_id)
            if document is None:
                raise ResourceNotFoundError("Document", document_id)

            if document.status in TERMINAL_DOCUMENT_STATUSES:
                logger.info(f"Document already {document.status}, skipping: {document_id}")
                return document.to_json()

            document.status = DocumentStatus.PROCESSING.value
            session.commit()

            try:
                content = storage.download(settings.documents_bucket, document.storage_path)
                text = extract_text(content, document.name, document.type)
                analysis = self.analyze_text(text, document.name, document.type)

                document.extracted_text = text
                document.summary = analysis["summary"]
                document.ai_tags = analysis["tags"]
                document.category = categorize_document(
                    list(analysis["tags"]) + list(document.tags or []),
                    document.name
                )
                document.status = DocumentStatus.PROCESSED.value
                document.processing_error = None
                logger.info(f"Document processed: {document_id} -> {document.category}")

            except Exception as e:
                logger.error(f"Document processing failed: {document_id} - {str(e)}")
                document.status = DocumentStatus.ERROR.value
                document.processing_error = str(e)
                if not document.category:
                    document.category = categorize_document(document.tags, document.name)

            return document.to_json()


# Global document processor instance
document_processor = DocumentProcessor()
