"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Cross-origin policy applied to every response
CORS_ALLOW_ORIGIN = "*"
CORS_ALLOW_METHODS = "GET, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"
CORS_MAX_AGE_SECONDS = 86400
