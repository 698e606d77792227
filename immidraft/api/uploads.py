"""
Upload validation shared by the routers
"""
import mimetypes
from pathlib import Path
from typing import List, Optional, Tuple
from fastapi import HTTPException, UploadFile
from config.settings import settings
from immidraft.utils.constants import ALLOWED_EXTENSIONS, ALLOWED_MIME_TYPES
from immidraft.utils.helpers import sanitize_filename


async def read_upload(file: UploadFile) -> Tuple[str, bytes, str]:
    """
    Read and validate an uploaded file

    Returns:
        (safe filename, content, MIME type)

    Raises:
        HTTPException: 413 when too large, 400 when empty or of a disallowed type
    """
    safe_filename = sanitize_filename(file.filename)

    file_ext = Path(safe_filename).suffix.lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File type not allowed: {file_ext or 'none'}. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    mime_type, _ = mimetypes.guess_type(safe_filename)
    mime_type = mime_type or file.content_type or "application/octet-stream"
    if mime_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(status_code=400, detail=f"MIME type not allowed: {mime_type}")

    content = await file.read()
    if len(content) > settings.max_file_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File '{safe_filename}' is too large (max {settings.max_file_size_mb}MB)"
        )
    if not content:
        raise HTTPException(status_code=400, detail=f"File '{safe_filename}' is empty")

    return safe_filename, content, mime_type


def parse_list_field(value: Optional[str]) -> List[str]:
    """Comma-separated form field -> list of stripped, non-empty values"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
