"""
Common response format helpers
"""
from typing import Any, Optional, Dict, List


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a success response

    Args:
        data: response payload
        message: optional message

    Returns:
        success response dict
    """
    response = {
        "success": True,
        "data": data,
        "error": None
    }

    if message:
        response["message"] = message

    return response


def error_response(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build an error response

    Args:
        code: error code
        message: error message
        details: extra detail

    Returns:
        error response dict
    """
    return {
        "success": False,
        "data": None,
        "error": {
            "code": code,
            "message": message,
            "details": details
        }
    }


def list_response(
    items: List[Dict[str, Any]],
    total_count: Optional[int] = None,
    limit: Optional[int] = None,
    offset: int = 0
) -> Dict[str, Any]:
    """
    Build a success response for a list endpoint

    Args:
        items: serialized records
        total_count: number of records before paging (defaults to len(items))
        limit: page size, when paging was applied
        offset: page offset

    Returns:
        success response dict with the items and paging info
    """
    data = {
        "total_count": len(items) if total_count is None else total_count,
        "items": items,
    }
    if limit is not None:
        data["limit"] = limit
        data["offset"] = offset
    return success_response(data)
