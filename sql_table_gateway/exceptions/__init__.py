# Base exception class
from .base import TableGatewayError

# Domain-specific exceptions
from .domain_exceptions import (
    ConfigurationError,
    PreconditionError,
    QueryExecutionError,
    ValidationError,
)

__all__ = [
    # Base exception
    "TableGatewayError",

    # Domain exceptions (alphabetically ordered)
    "ConfigurationError",
    "PreconditionError",
    "QueryExecutionError",
    "ValidationError",
]
