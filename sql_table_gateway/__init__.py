"""
SQL Table Gateway

Maps one database table to one row class and generates the SQL for
single-row lookup, filtered lookup, insert, update and delete.
"""

from .config import GatewayConfig
from .exceptions import (
    ConfigurationError,
    PreconditionError,
    QueryExecutionError,
    TableGatewayError,
    ValidationError,
)
from .models import (
    AUDIT_COLUMNS,
    ColumnType,
    Outcome,
    ResultShape,
    RowObject,
    TableDefinition,
    coerce_value,
)
from .core import (
    DbApiDriver,
    Dialect,
    Driver,
    ParamType,
    Statement,
    TableGateway,
    create_table_gateway,
    get_dialect,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "GatewayConfig",

    # Exceptions
    "ConfigurationError",
    "PreconditionError",
    "QueryExecutionError",
    "TableGatewayError",
    "ValidationError",

    # Models
    "AUDIT_COLUMNS",
    "ColumnType",
    "Outcome",
    "ResultShape",
    "RowObject",
    "TableDefinition",
    "coerce_value",

    # Gateway and driver contract
    "DbApiDriver",
    "Dialect",
    "Driver",
    "ParamType",
    "Statement",
    "TableGateway",
    "create_table_gateway",
    "get_dialect",
]
