"""
Custom exception classes
"""


class ImmiDraftError(Exception):
    """Base exception"""
    pass


class ResourceNotFoundError(ImmiDraftError):
    """Raised when a stored record does not exist"""
    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found: {resource_id}")


class InvalidInputError(ImmiDraftError):
    """Raised on invalid client input"""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(f"Invalid input: {message}")


class GPTAPIError(ImmiDraftError):
    """Raised when the OpenAI API call fails"""
    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(f"GPT API error: {message}")


class DocumentProcessingError(ImmiDraftError):
    """Raised when text cannot be extracted from a document"""
    def __init__(self, message: str, document_name: str = None):
        self.document_name = document_name
        super().__init__(f"Document processing error: {message}")


class StorageError(ImmiDraftError):
    """Raised on object storage failures"""
    def __init__(self, message: str):
        super().__init__(f"Storage error: {message}")


class DatabaseError(ImmiDraftError):
    """Raised on database failures"""
    def __init__(self, message: str):
        super().__init__(f"Database error: {message}")


class ValidationError(ImmiDraftError):
    """Raised when a business rule check fails"""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(f"Validation failed: {message}")
