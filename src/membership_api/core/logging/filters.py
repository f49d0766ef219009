"""
Logging filters.

- RequestIdFilter: guarantees every LogRecord carries a `request_id` attribute,
  read from a contextvar that the HTTP middleware sets per request. Contextvars
  survive `await` boundaries, so the id follows the request through the
  repositories down to the mapper.
- RedactFilter: masks secrets and member PII (email, phone) passed through
  `extra={...}` before any handler formats them.

Both filters always return True; they annotate records, they never drop them.
"""

import logging
from logging import LogRecord
import contextvars

# Default is None: "no request id set" (outside of an HTTP request, e.g. scripts/tests)
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context.

    Returns:
        token: pass it to reset_request_id(token) to restore the previous value
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Set `record.request_id` to, in order of preference:
      * a request_id explicitly passed via `extra`,
      * the contextvar value (set by RequestIDMiddleware),
      * the sentinel "-" so `%(request_id)s` format strings never fail.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Mask record attributes whose name is sensitive (credentials and member contact data)."""

    SENSITIVE = {
        "password", "secret", "token", "access_token", "refresh_token", "authorization",
        "email", "phone", "phone_number", "db_url", "database_url",
    }

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
        return True
