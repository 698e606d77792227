"""
Declarative base for database models
"""
from sqlalchemy.orm import declarative_base
from datetime import datetime
from typing import Any, Dict, Iterable, Optional
from immidraft.utils.helpers import to_iso

Base = declarative_base()


class BaseModel(Base):
    """Common model helpers"""
    __abstract__ = True

    def to_json(self):
        """Column values as a JSON-serializable dict"""
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            result[column.name] = to_iso(value) if isinstance(value, datetime) else value
        return result

    def apply_changes(
        self,
        changes: Dict[str, Any],
        protected: Optional[Iterable[str]] = None
    ) -> None:
        """
        Overwrite column values from a dict

        Unknown keys and protected columns (``id`` and timestamps by default)
        are ignored.

        Args:
            changes: column name -> new value
            protected: extra column names that must not be overwritten
        """
        blocked = {"id", "created_at", "updated_at"} | set(protected or ())
        columns = {column.name for column in self.__table__.columns}
        for key, value in changes.items():
            if key in columns and key not in blocked:
                setattr(self, key, value)
