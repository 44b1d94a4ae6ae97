# Middleware package init
"""
ProductHub Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    - Request ID first, so the access log line and every log line written
      by the handler carry the same correlation ID.
    - The access log measures the full handler duration, including the
      MongoDB round-trips.
"""
