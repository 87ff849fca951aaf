"""
Tenistas API — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate or accept X-Request-ID for correlation
    2. Logging: Log method, path, status and duration with the request ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
