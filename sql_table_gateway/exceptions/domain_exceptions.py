"""
Domain-Specific Exceptions for the SQL Table Gateway

All exceptions extend the base TableGatewayError.

Organized by category:
1. Setup Errors
2. Call Precondition Errors
3. Data Validation Errors
4. Statement Execution Errors
"""

from typing import Any, Dict, List, Optional

from .base import TableGatewayError


# =============================================================================
# Setup Errors
# =============================================================================

class ConfigurationError(TableGatewayError):
    """Raised when a gateway cannot be set up.

    Used for:
    - Driver handles that are neither a Driver nor a DB-API connection
    - Missing or invalid table definition fields
    - Non-boolean values for boolean flags
    - Unknown SQL dialect names
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize configuration error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level configuration errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['configuration_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Call Precondition Errors
# =============================================================================

class PreconditionError(TableGatewayError):
    """Raised when an operation is called with a row it cannot act on.

    Used for:
    - update() on a row without a primary key value
    - delete() on a row without a primary key value
    """

    def __init__(self, message: str, table_name: Optional[str] = None, operation: Optional[str] = None):
        self.table_name = table_name
        self.operation = operation
        context = {}
        if table_name:
            context['table_name'] = table_name
        if operation:
            context['operation'] = operation
        super().__init__(message, None, context)


# =============================================================================
# Data Validation Errors
# =============================================================================

class ValidationError(TableGatewayError):
    """Raised when a value cannot be coerced to its declared column type."""

    def __init__(self, message: str, column: Optional[str] = None, value: Any = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            column: Column whose value failed coercion
            value: The rejected value
            original_error: The original exception that caused this error
        """
        self.column = column
        self.value = value
        context = {}
        if column:
            context['column'] = column
            context['value'] = value
        super().__init__(message, original_error, context)


# =============================================================================
# Statement Execution Errors
# =============================================================================

class QueryExecutionError(TableGatewayError):
    """Describes a statement the driver reported as failed.

    The gateway does not raise this by default: failed statements come back as
    None/empty results. The exception built for the last failure is kept on
    ``TableGateway.last_exception`` so callers may raise it themselves.
    """

    def __init__(self, sql: str, bind_values: Optional[List[Any]] = None, driver_error: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize query execution error.

        Args:
            sql: The statement text that failed
            bind_values: Positional parameters bound to the statement
            driver_error: Diagnostic reported by the driver
            original_error: The driver exception, when there was one
        """
        self.sql = sql
        self.bind_values = list(bind_values or [])
        self.driver_error = driver_error
        context = {
            'sql': sql,
            'bind_values': self.bind_values,
        }
        if driver_error:
            context['driver_error'] = driver_error
        super().__init__(f"Statement execution failed: {driver_error or 'unknown driver error'}", original_error, context)
