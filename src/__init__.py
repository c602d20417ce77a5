"""Resource Catalog API - a read-only HTTP service over a fixed resource catalog.

Architecture Overview:
- **API Layer**: FastAPI routes, middleware and response envelopes
- **Core Layer**: Configuration, logging, tracing, errors and result types
- **Domain Layer**: The ``Resource`` record and the store contract
- **Infrastructure Layer**: Store implementations (memory, file, remote)
"""
