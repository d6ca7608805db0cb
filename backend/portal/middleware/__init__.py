"""
Institute Portal Backend: Middleware Package
=============================================

Middleware Chain (order matters):
    Request → [Request Context] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Request Context first: request id and locale are in place before
       anything logs
    2. Access Log: one line per request, stamped with both
    3. GZip/CORS: applied by Starlette's own middleware
"""
