"""
Visa criteria reference data
"""
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml
from immidraft.db.connection import db_manager
from immidraft.db.models import Criterion
from immidraft.services.sample_letters import normalize_visa_type
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

CRITERIA_FILE = Path(__file__).parent.parent / "data" / "criteria.yaml"


def load_default_criteria(path: Path = CRITERIA_FILE) -> Dict[str, List[Dict[str, Any]]]:
    """Criteria rows from YAML, keyed by normalized visa type"""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data.get("criteria", {})


class CriteriaService:
    """Reads and seeds the criteria table"""

    def seed_default_criteria(self, path: Path = CRITERIA_FILE) -> int:
        """
        Insert the bundled criteria when the table is empty

        Returns:
            number of rows inserted
        """
        with db_manager.get_db_session() as session:
            if session.query(Criterion).count() > 0:
                return 0

            inserted = 0
            for visa_type, rows in load_default_criteria(path).items():
                for row in rows:
                    session.add(Criterion(
                        visa_type=visa_type,
                        title=row["title"],
                        description=row.get("description"),
                        category=row.get("category"),
                        required_count=row.get("required_count", 1),
                    ))
                    inserted += 1

        logger.info(f"Seeded {inserted} criteria rows")
        return inserted

    def list_criteria(self, visa_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Criteria for a visa type (all criteria when no type is given)

        Visa type spelling variants resolve to the stored key ("O-1A" -> "O1").
        """
        with db_manager.get_db_session() as session:
            query = session.query(Criterion)
            if visa_type:
                query = query.filter(Criterion.visa_type == normalize_visa_type(visa_type))
            rows = query.order_by(Criterion.visa_type, Criterion.title).all()
            return [row.to_json() for row in rows]


# Global criteria service instance
criteria_service = CriteriaService()
