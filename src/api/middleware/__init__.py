"""FastAPI middleware for cross-cutting request/response concerns.

Outermost first:
1. RequestContextMiddleware: correlation IDs
2. CORSMiddleware: answers OPTIONS, adds CORS headers to every response
3. RequestLoggingMiddleware: structured request logs with timing
4. ReadOnlyMethodMiddleware: 405 for any method other than GET

``error_handler`` renders every error envelope, both for store results the
routes map explicitly and for exceptions caught by the global handlers.
"""
