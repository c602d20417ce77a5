"""Shared application infrastructure.

- **config**: Settings loaded from the environment
- **context**: Request context and correlation ID management
- **exceptions**: Error hierarchy with codes, severities and HTTP statuses
- **logging**: Loguru setup with console and JSON formatters
- **observability**: OpenTelemetry tracing
- **result**: ``Ok``/``Err`` values returned by store operations
- **types**: Type aliases
"""
