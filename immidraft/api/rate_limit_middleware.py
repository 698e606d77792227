"""
Rate limiting middleware
"""
from collections import defaultdict
from datetime import datetime, timedelta
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from config.settings import settings
from immidraft.utils.logger import get_logger
from immidraft.utils.response import error_response

logger = get_logger(__name__)

EXEMPT_PATHS = ("/health", "/")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-IP in-memory rate limiter

    Counts requests in a sliding window of ``period`` seconds.
    """

    def __init__(self, app, calls: int = None, period: int = 60):
        """
        Args:
            app: ASGI application
            calls: allowed calls per period (defaults to settings.rate_limit_per_minute)
            period: window length in seconds
        """
        super().__init__(app)
        self.calls = calls or settings.rate_limit_per_minute
        self.period = period
        self.requests = defaultdict(list)
        self.last_cleanup = datetime.now()

    @staticmethod
    def client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next):
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = self.client_ip(request)
        now = datetime.now()

        self.maybe_cleanup(now)

        cutoff_time = now - timedelta(seconds=self.period)
        self.requests[client_ip] = [ts for ts in self.requests[client_ip] if ts > cutoff_time]

        if len(self.requests[client_ip]) >= self.calls:
            logger.warning(f"Rate limit exceeded for IP: {client_ip}")
            return JSONResponse(
                status_code=429,
                content=error_response(
                    code="RATE_LIMIT_EXCEEDED",
                    message="Rate limit exceeded. Please try again later."
                ),
                headers={
                    "Retry-After": str(self.period),
                    "X-RateLimit-Limit": str(self.calls),
                    "X-RateLimit-Remaining": "0",
                }
            )

        self.requests[client_ip].append(now)
        response = await call_next(request)

        remaining = max(0, self.calls - len(self.requests[client_ip]))
        response.headers["X-RateLimit-Limit"] = str(self.calls)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(int((now + timedelta(seconds=self.period)).timestamp()))
        return response

    def maybe_cleanup(self, now: datetime) -> bool:
        """Run the history cleanup when more than five minutes have passed"""
        if (now - self.last_cleanup).total_seconds() <= 300:
            return False
        self._cleanup_old_requests(now)
        self.last_cleanup = now
        return True

    def _cleanup_old_requests(self, now: datetime):
        """Drop request history older than two periods"""
        cutoff_time = now - timedelta(seconds=self.period * 2)
        for ip in list(self.requests.keys()):
            self.requests[ip] = [ts for ts in self.requests[ip] if ts > cutoff_time]
            if not self.requests[ip]:
                del self.requests[ip]
