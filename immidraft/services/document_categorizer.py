"""
Document categorizer

Buckets a document into a case category from its AI tags and filename.
"""
from typing import Any, Dict, Iterable, List, Optional
from config.category_keywords import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, get_category_title


def categorize_document(
    tags: Optional[Iterable[str]] = None,
    filename: Optional[str] = None
) -> str:
    """
    Return the first category whose keyword appears in a tag or the filename

    Matching is a lower-cased substring check. Rules are evaluated in
    ``CATEGORY_KEYWORDS`` order; nothing matching (including no input at
    all) gives ``DEFAULT_CATEGORY``.

    Args:
        tags: AI-derived or user tags
        filename: original filename

    Returns:
        category key
    """
    haystack = [str(tag).lower() for tag in (tags or []) if tag]
    if filename:
        haystack.append(filename.lower())

    if not haystack:
        return DEFAULT_CATEGORY

    for category, config in CATEGORY_KEYWORDS.items():
        for keyword in config["keywords"]:
            if any(keyword in text for text in haystack):
                return category

    return DEFAULT_CATEGORY


def group_by_category(documents: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Group serialized documents by their stored category

    Every known category is present, in display order, even when empty.
    Documents without a known category land in ``uncategorized``.

    Args:
        documents: document dicts with a ``category`` key

    Returns:
        category key -> {"title", "documents"}
    """
    groups = {
        category: {"title": get_category_title(category), "documents": []}
        for category in CATEGORY_KEYWORDS
    }
    groups["uncategorized"] = {"title": "Uncategorized", "documents": []}

    for document in documents:
        category = document.get("category")
        key = category if category in CATEGORY_KEYWORDS else "uncategorized"
        groups[key]["documents"].append(document)

    return groups
