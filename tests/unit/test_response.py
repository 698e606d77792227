"""
Response format unit tests
"""
from immidraft.utils.response import success_response, error_response, list_response


def test_success_response():
    response = success_response({"key": "value"}, "done")
    assert response["success"] is True
    assert response["data"] == {"key": "value"}
    assert response["error"] is None
    assert response["message"] == "done"


def test_success_response_without_message():
    response = success_response({"key": "value"})
    assert "message" not in response


def test_error_response():
    response = error_response("NOT_FOUND", "Case not found: 1", {"id": "1"})
    assert response["success"] is False
    assert response["data"] is None
    assert response["error"] == {"code": "NOT_FOUND", "message": "Case not found: 1", "details": {"id": "1"}}


def test_list_response():
    response = list_response([{"id": 1}, {"id": 2}])
    assert response["data"] == {"total_count": 2, "items": [{"id": 1}, {"id": 2}]}

    paged = list_response([{"id": 3}], total_count=10, limit=1, offset=2)
    assert paged["data"]["total_count"] == 10
    assert paged["data"]["limit"] == 1
    assert paged["data"]["offset"] == 2
