"""Type aliases shared across the application."""

from typing import Any

# Extra fields bound to a log line
type LogContext = dict[str, Any]

# ASGI scope type for instrumentation hooks
type AsgiScope = dict[str, Any]
