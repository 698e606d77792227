"""
Request logging middleware
"""
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from immidraft.utils.logger import get_logger
from immidraft.utils.helpers import mask_personal_info

logger = get_logger(__name__)

JSON_CONTENT_TYPES = ("application/json",)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        logger.info(f"Request: {method} {path} - IP: {client_ip}")

        # Multipart uploads are not logged
        content_type = request.headers.get("content-type", "")
        if method in ("POST", "PUT", "PATCH") and content_type.startswith(JSON_CONTENT_TYPES):
            try:
                body = await request.body()
                logger.debug(f"Request body: {mask_personal_info(body.decode('utf-8'))}")
            except UnicodeDecodeError as e:
                logger.warning(f"Could not log request body: {str(e)}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(f"Request failed: {method} {path} - {str(e)} - {process_time:.3f}s")
            raise

        process_time = time.time() - start_time
        logger.info(f"Response: {method} {path} - status {response.status_code} - {process_time:.3f}s")
        response.headers["X-Process-Time"] = str(process_time)
        return response
