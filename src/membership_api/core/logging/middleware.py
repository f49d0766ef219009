"""
Request ID middleware for FastAPI / Starlette.

Each request gets an id: the incoming `X-Request-ID` header when it is a valid
UUID, a fresh UUID4 otherwise. The id is stored in the contextvar read by
RequestIdFilter, so every log line emitted while serving the request (router,
repositories, mapper) carries it, and it is echoed in the response header.
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def _resolve_request_id(incoming: str | None) -> str:
    # Only UUIDs are accepted from clients, anything else could inject into log lines
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = _resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
