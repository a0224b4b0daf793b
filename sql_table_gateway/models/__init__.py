# Row representation and coercion
from .row_object import (
    ColumnType,
    RowObject,
    coerce_value,
)

# Table configuration
from .table_definition import (
    AUDIT_COLUMNS,
    TableDefinition,
)

# Operation results
from .results import (
    Outcome,
    ResultShape,
)

__all__ = [
    "AUDIT_COLUMNS",
    "ColumnType",
    "Outcome",
    "ResultShape",
    "RowObject",
    "TableDefinition",
    "coerce_value",
]
