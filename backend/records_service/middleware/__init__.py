# Middleware package init
"""
Records Service - Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [Unhandled Exception] → Route Handler

    1. Request ID: assigns a correlation id used by every log line of the request
    2. Logging: one access log entry per request with status and duration
    3. Unhandled Exception: empty 500 for errors no exception handler claimed

The order is reversed for responses, so the access log sees the final status
and the X-Request-ID header is set on every response.
"""
