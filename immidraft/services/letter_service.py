"""
Letter CRUD
"""
from typing import Any, Dict, List, Optional
from immidraft.db.connection import db_manager
from immidraft.db.models import Letter
from immidraft.utils.constants import LetterType
from immidraft.utils.exceptions import ResourceNotFoundError, InvalidInputError
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

LETTER_TYPES = {letter_type.value for letter_type in LetterType}


def _check_letter_type(data: Dict[str, Any]) -> None:
    letter_type = data.get("letter_type")
    if letter_type is not None and letter_type not in LETTER_TYPES:
        raise InvalidInputError(f"letter_type must be one of {sorted(LETTER_TYPES)}", "letter_type")


class LetterService:
    """Petition and expert letters"""

    def create_letter(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not (data.get("title") or "").strip():
            raise InvalidInputError("title is required", "title")
        _check_letter_type(data)

        with db_manager.get_db_session() as session:
            letter = Letter(content="", document_ids=[], tags=[])
            letter.apply_changes(data)
            if not letter.letter_type:
                letter.letter_type = LetterType.PETITION.value
            session.add(letter)
            session.flush()
            logger.info(f"Letter created: {letter.id}")
            return letter.to_json()

    def get_letter(self, letter_id: str) -> Dict[str, Any]:
        with db_manager.get_db_session() as session:
            letter = session.get(Letter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("Letter", letter_id)
            return letter.to_json()

    def list_letters(
        self,
        visa_type: Optional[str] = None,
        letter_type: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Letters, most recently updated first"""
        with db_manager.get_db_session() as session:
            query = session.query(Letter)
            if visa_type:
                query = query.filter(Letter.visa_type == visa_type)
            if letter_type:
                query = query.filter(Letter.letter_type == letter_type)
            letters = query.order_by(Letter.updated_at.desc()).all()
            return [letter.to_json() for letter in letters]

    def update_letter(self, letter_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Overwrite the given fields wholesale"""
        _check_letter_type(changes)
        with db_manager.get_db_session() as session:
            letter = session.get(Letter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("Letter", letter_id)
            letter.apply_changes(changes)
            session.flush()
            logger.info(f"Letter saved: {letter_id}")
            return letter.to_json()

    def delete_letter(self, letter_id: str) -> None:
        with db_manager.get_db_session() as session:
            letter = session.get(Letter, letter_id)
            if letter is None:
                raise ResourceNotFoundError("Letter", letter_id)
            session.delete(letter)
        logger.info(f"Letter deleted: {letter_id}")


# Global letter service instance
letter_service = LetterService()
