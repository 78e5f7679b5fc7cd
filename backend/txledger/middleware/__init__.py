# Middleware package init
"""
Transaction Ledger Backend — Middleware Package
================================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: generate or accept X-Request-ID, store it in a ContextVar
    2. Logging: log method, path, status and duration with that ID
    3. CORS: handled by FastAPI's CORSMiddleware (single front-end origin)
"""
