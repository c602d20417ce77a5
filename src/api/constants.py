"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Methods the read-only API answers; everything else is rejected with 405
READ_METHOD = "GET"
PREFLIGHT_METHOD = "OPTIONS"

# Route paths
API_PREFIX = "/api"
RESOURCES_PATH = "/resources"
CATEGORIES_PATH = "/categories"
CATEGORY_QUERY_PARAM = "category"

# Client-facing error messages
MSG_METHOD_NOT_ALLOWED = "Method not allowed"
MSG_ENDPOINT_NOT_FOUND = "Endpoint not found"
MSG_INVALID_RESOURCE_ID = "Invalid resource ID. Must be a number."
MSG_INTERNAL_ERROR = "Internal server error"
MSG_INVALID_REQUEST = "Invalid request"
