"""
Wildtrail Backend: Middleware Package
=====================================

Middleware Chain (order matters):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit first: reject excess admin writes before any processing
    2. Request ID: correlation ID for logs and error bodies
    3. Logging: access line with status and duration

Responses pass back through the chain in reverse, so the request ID header
and the logged status reflect the final response.
"""
