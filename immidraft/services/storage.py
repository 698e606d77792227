"""
Object storage on the local filesystem

Files live under ``<upload_dir>/<bucket>/<object path>``.
"""
from datetime import datetime
from pathlib import Path
from typing import Optional
from config.settings import settings
from immidraft.utils.exceptions import StorageError
from immidraft.utils.helpers import sanitize_filename
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)


def build_object_path(prefix: str, filename: str) -> str:
    """
    Object path ``<prefix>/<timestamp>-<sanitized filename>``

    Args:
        prefix: owning record folder (e.g. a case id)
        filename: client supplied filename
    """
    timestamp = int(datetime.utcnow().timestamp() * 1000)
    return f"{prefix}/{timestamp}-{sanitize_filename(filename)}"


class LocalStorage:
    """Bucketed file storage rooted at a directory"""

    def __init__(self, root_dir: Optional[str] = None):
        self._root_dir = root_dir

    @property
    def root(self) -> Path:
        return Path(self._root_dir or settings.upload_dir).resolve()

    def resolve(self, bucket: str, object_path: str) -> Path:
        """
        Absolute path of an object

        Raises:
            StorageError: when the path escapes the storage root
        """
        root = self.root
        path = (root / bucket / object_path).resolve()
        if not path.is_relative_to(root / bucket):
            raise StorageError(f"path outside bucket: {bucket}/{object_path}")
        return path

    def upload(self, bucket: str, object_path: str, content: bytes) -> str:
        """
        Store bytes under ``bucket/object_path``

        Returns:
            object path
        """
        path = self.resolve(bucket, object_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise StorageError(f"upload failed for {bucket}/{object_path}: {str(e)}")

        logger.info(f"Object stored: {bucket}/{object_path} ({len(content)} bytes)")
        return object_path

    def download(self, bucket: str, object_path: str) -> bytes:
        path = self.resolve(bucket, object_path)
        if not path.exists():
            raise StorageError(f"object not found: {bucket}/{object_path}")
        return path.read_bytes()

    def exists(self, bucket: str, object_path: str) -> bool:
        return self.resolve(bucket, object_path).exists()

    def delete(self, bucket: str, object_path: str) -> bool:
        """
        Remove an object

        Returns:
            True when a file was removed
        """
        path = self.resolve(bucket, object_path)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Object deleted: {bucket}/{object_path}")
        return True


# Global storage instance
storage = LocalStorage()
