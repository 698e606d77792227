"""
Utility functions
"""
import re
import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional, Any, Dict


XML_INVALID_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f]')


def strip_control_chars(text: Optional[str]) -> str:
    """
    Remove control characters that XML (and so DOCX) cannot store

    Tabs, newlines and carriage returns are kept.
    """
    return XML_INVALID_CHARS.sub('', text or '')


def mask_personal_info(text: str, mask_char: str = "*") -> str:
    """
    Mask personal data before it reaches the logs

    Args:
        text: raw text
        mask_char: masking character

    Returns:
        masked text
    """
    # Phone numbers (555-123-4567 -> 555-***-4567)
    text = re.sub(r'(\d{3})[-.](\d{3})[-.](\d{4})', r'\1-***-\3', text)

    # Emails (user@example.com -> use***@example.com)
    text = re.sub(r'(\w{1,3})(\w*)(@\w+\.\w+)', r'\1' + mask_char * 3 + r'\3', text)

    # SSN (123-45-6789 -> ***-**-6789)
    text = re.sub(r'\b\d{3}-\d{2}-(\d{4})\b', r'***-**-\1', text)

    return text


def generate_uuid() -> str:
    """Return a new UUID string"""
    return str(uuid.uuid4())


def sanitize_filename(filename: str) -> str:
    """
    Strip directories and unsafe characters from an uploaded filename

    Args:
        filename: client supplied filename

    Returns:
        safe filename (``file`` when nothing usable remains)
    """
    name = Path(filename or "").name
    name = re.sub(r'[^A-Za-z0-9._-]', '_', name)
    name = name.lstrip('.')
    return name or "file"


def format_long_date(date: Optional[datetime] = None) -> str:
    """
    Format a date as ``October 19, 2026``

    Args:
        date: date to format (defaults to now)
    """
    date = date or datetime.now()
    return f"{date.strftime('%B')} {date.day}, {date.year}"


def parse_json_from_text(content: str) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of a model response

    Handles ```json fenced blocks and leading/trailing prose.

    Args:
        content: raw response text

    Returns:
        parsed dict or None when no object can be decoded
    """
    if not content:
        return None

    content = content.strip()
    json_match = re.search(r'```(?:json)?\s*(\{.*?\})\s*```', content, re.DOTALL)
    if json_match:
        content = json_match.group(1)
    else:
        json_match = re.search(r'\{.*\}', content, re.DOTALL)
        if json_match:
            content = json_match.group(0)

    try:
        result = json.loads(content)
    except json.JSONDecodeError:
        return None

    return result if isinstance(result, dict) else None


def clean_ai_json(text: str) -> str:
    """
    Turn a loosely formatted model response into parseable JSON text

    Removes code fences and backticks, converts Python literals
    (None/True/False, single quotes) and drops trailing commas.

    Args:
        text: raw response text

    Returns:
        cleaned JSON text (always an object literal)
    """
    if not text:
        return "{}"

    cleaned = re.sub(r'```(?:json|javascript|js|python)?\s*([\s\S]*?)```', r'\1', text)
    cleaned = cleaned.replace('`', '')

    cleaned = re.sub(r'\bNone\b', 'null', cleaned)
    cleaned = re.sub(r'\bTrue\b', 'true', cleaned)
    cleaned = re.sub(r'\bFalse\b', 'false', cleaned)

    # Single-quoted keys, then single-quoted values
    cleaned = re.sub(r"([{,]\s*)'([^']+)'(\s*:)", r'\1"\2"\3', cleaned)
    cleaned = re.sub(r":\s*'([^']+)'", r': "\1"', cleaned)

    cleaned = re.sub(r',(\s*[}\]])', r'\1', cleaned)
    cleaned = cleaned.strip()

    if not cleaned.startswith('{'):
        cleaned = '{' + cleaned + '}'

    return cleaned


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """isoformat() that passes None through"""
    return value.isoformat() if value else None
