"""
app/core/middleware.py

Purpose: Request body size cap

- Rejects requests whose Content-Length exceeds MAX_REQUEST_SIZE
- Runs before Starlette spools multipart parts to disk
- Bodies sent without Content-Length (chunked) are not capped here
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

from app.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_TOO_LARGE_MESSAGE = "Request body too large"


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, max_bytes: int = 12_000_000):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request, call_next):
        length = request.headers.get("content-length")
        try:
            size = int(length) if length is not None else None
        except ValueError:
            size = None

        if size is not None and size > self.max_bytes:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: {size} bytes > {self.max_bytes}"
            )
            return PlainTextResponse(
                f"Error occurred: {REQUEST_TOO_LARGE_MESSAGE}",
                status_code=500
            )

        return await call_next(request)
