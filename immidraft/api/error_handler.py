"""
API exception handlers
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from immidraft.utils.exceptions import (
    ResourceNotFoundError,
    InvalidInputError,
    GPTAPIError,
    DocumentProcessingError,
    StorageError,
    DatabaseError,
    ValidationError,
)
from immidraft.utils.response import error_response
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request body or parameters"""
    errors = exc.errors()
    error_details = {
        "field": errors[0].get("loc")[-1] if errors else None,
        "message": errors[0].get("msg") if errors else "validation error"
    }

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details=error_details
        )
    )


async def not_found_handler(request: Request, exc: ResourceNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response(
            code="NOT_FOUND",
            message=str(exc),
            details={"resource": exc.resource, "id": str(exc.resource_id)}
        )
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(
            code="INVALID_INPUT",
            message=str(exc),
            details={"field": exc.field} if exc.field else None
        )
    )


async def validation_error_handler(request: Request, exc: ValidationError):
    """Business rule failures (empty upload, unpaid order, ...)"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(
            code="VALIDATION_ERROR",
            message=str(exc),
            details={"field": exc.field} if exc.field else None
        )
    )


async def gpt_api_error_handler(request: Request, exc: GPTAPIError):
    logger.error(f"GPT API error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=error_response(
            code="GPT_API_ERROR",
            message="The AI service request failed.",
            details={"status_code": exc.status_code} if exc.status_code else None
        )
    )


async def document_processing_error_handler(request: Request, exc: DocumentProcessingError):
    logger.warning(f"Document processing error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response(
            code="DOCUMENT_PROCESSING_ERROR",
            message=str(exc),
            details={"document": exc.document_name} if exc.document_name else None
        )
    )


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            code="STORAGE_ERROR",
            message="A file storage operation failed."
        )
    )


async def database_error_handler(request: Request, exc: DatabaseError):
    logger.error(f"Database error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            code="DATABASE_ERROR",
            message="A database operation failed."
        )
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            code="INTERNAL_SERVER_ERROR",
            message="Internal server error."
        )
    )


EXCEPTION_HANDLERS = [
    (RequestValidationError, request_validation_handler),
    (ResourceNotFoundError, not_found_handler),
    (InvalidInputError, invalid_input_handler),
    (ValidationError, validation_error_handler),
    (GPTAPIError, gpt_api_error_handler),
    (DocumentProcessingError, document_processing_error_handler),
    (StorageError, storage_error_handler),
    (DatabaseError, database_error_handler),
    (Exception, general_exception_handler),
]
