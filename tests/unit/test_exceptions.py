"""
Exception class unit tests
"""
from immidraft.utils.exceptions import (
    ImmiDraftError,
    ResourceNotFoundError,
    InvalidInputError,
    GPTAPIError,
    DocumentProcessingError,
    StorageError,
    DatabaseError,
    ValidationError,
)


def test_resource_not_found_error():
    error = ResourceNotFoundError("Case", "abc")
    assert error.resource == "Case"
    assert error.resource_id == "abc"
    assert str(error) == "Case not found: abc"


def test_invalid_input_error():
    error = InvalidInputError("title is required", "title")
    assert error.field == "title"
    assert "Invalid input" in str(error)


def test_gpt_api_error():
    error = GPTAPIError("rate limited", 429)
    assert error.status_code == 429
    assert "GPT API error" in str(error)


def test_document_processing_error():
    error = DocumentProcessingError("unreadable", "scan.pdf")
    assert error.document_name == "scan.pdf"
    assert "unreadable" in str(error)


def test_storage_and_database_errors():
    assert "Storage error" in str(StorageError("disk full"))
    assert "Database error" in str(DatabaseError("locked"))


def test_validation_error():
    error = ValidationError("payment was not completed", "payment_result")
    assert error.field == "payment_result"
    assert "Validation failed" in str(error)


def test_hierarchy():
    for error in (
        ResourceNotFoundError("Case", 1),
        InvalidInputError("x"),
        GPTAPIError("x"),
        DocumentProcessingError("x"),
        StorageError("x"),
        DatabaseError("x"),
        ValidationError("x"),
    ):
        assert isinstance(error, ImmiDraftError)
