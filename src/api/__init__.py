"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory and lifecycle management
- **routes**: Catalog endpoints and the catch-all 404 route
- **middleware**: Correlation IDs, CORS, request logging, method guard and
  error rendering
- **schemas**: ``{data, count}`` and ``{error, message, statusCode}`` envelopes
- **utils**: orjson response class and envelope helpers
"""
