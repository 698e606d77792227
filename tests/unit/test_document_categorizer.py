"""
Document categorizer unit tests
"""
import pytest
from immidraft.services.document_categorizer import categorize_document, group_by_category
from config.category_keywords import CATEGORY_KEYWORDS, get_category_title


@pytest.mark.parametrize("tags, filename, expected", [
    (["resume"], None, "resume"),
    (["Diploma"], None, "degree"),
    (["academic transcript"], None, "degree"),
    (["professional license"], None, "license"),
    (["employment contract"], None, "employment"),
    (["recommendation"], None, "support"),
    (["best paper award"], None, "recognition"),
    (["news article"], None, "media"),
    ([], "John_CV.pdf", "resume"),
    (None, "bachelor_diploma.pdf", "degree"),
])
def test_categorize_document(tags, filename, expected):
    assert categorize_document(tags, filename) == expected


def test_rule_order_decides_between_matches():
    # "degree" is checked before "recognition"
    assert categorize_document(["award", "diploma"]) == "degree"


def test_unmatched_and_empty_default_to_resume():
    assert categorize_document(["misc"], "scan_001.pdf") == "resume"
    assert categorize_document([]) == "resume"
    assert categorize_document() == "resume"
    assert categorize_document([None, ""]) == "resume"


def test_group_by_category_keeps_every_category():
    documents = [
        {"id": "1", "category": "degree"},
        {"id": "2", "category": "media"},
        {"id": "3", "category": None},
        {"id": "4", "category": "bogus"},
    ]
    groups = group_by_category(documents)

    assert list(groups)[:len(CATEGORY_KEYWORDS)] == list(CATEGORY_KEYWORDS)
    assert groups["degree"]["title"] == get_category_title("degree")
    assert [d["id"] for d in groups["degree"]["documents"]] == ["1"]
    assert [d["id"] for d in groups["media"]["documents"]] == ["2"]
    assert [d["id"] for d in groups["uncategorized"]["documents"]] == ["3", "4"]
    assert groups["resume"]["documents"] == []
