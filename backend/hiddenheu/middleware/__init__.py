"""
HiddenHeu Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID sets the correlation ID used in logs and error bodies,
       including the 429 answer from the rate limiter.
    2. Rate Limit rejects abusive clients before any route code runs.
    3. Logging records status and duration once the response is built.
    4. CORS answers preflight requests and allows credentialed requests
       from the web client origins.

    Responses pass back through the same chain in reverse.
"""

from hiddenheu.middleware.logging import RequestLoggingMiddleware
from hiddenheu.middleware.rate_limit import RateLimitMiddleware
from hiddenheu.middleware.request_id import RequestIDMiddleware, request_id_var

__all__ = [
    "RateLimitMiddleware",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "request_id_var",
]
