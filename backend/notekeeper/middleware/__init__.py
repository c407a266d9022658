# Middleware package init
"""
Notekeeper Backend: Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assign a correlation ID used by every log line of the request
    2. Logging: log method, path, status and duration with that ID
    3. GZip / CORS: applied by FastAPI's bundled middleware
"""
