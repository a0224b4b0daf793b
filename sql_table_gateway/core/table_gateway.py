"""
SQL Table Gateway

One gateway maps one table to one row class and writes the SQL for the usual
single-table operations, so table-specific subclasses only declare their
table definition and, where needed, custom finders:

```python
class PostGateway(TableGateway):
    definition = {
        "table": "posts",
        "table_alias": "p",
        "modifiable_columns": ["title", "body", "published"],
        "column_types": {"published": "boolean"},
    }

    def find_published(self):
        self.make_select()
        self.sql += " and p.published = ?"
        self.bind_values.append(1)
        return self.find()
```

Statement building works on per-call state (``sql``, ``bind_values``,
``result_shape``) that ``execute()`` always clears, successful or not. A caller
may preset ``sql``/``bind_values`` before ``find()``, ``find_row()`` or
``find_by_id()``; the gateway only builds a default SELECT when nothing is
pending.

Because that state lives on the instance, a gateway is not reentrant: use one
gateway per in-flight operation, or serialize access to a shared one.

Failed statements are not raised. They are logged, ``last_outcome`` becomes
``Outcome.FAILED``, and the caller gets None / [] / False back.
"""

import logging
from datetime import datetime
from typing import Any, ClassVar, List, Mapping, Optional, Union

from ..config import GatewayConfig
from ..exceptions import ConfigurationError, PreconditionError, QueryExecutionError
from ..models import AUDIT_COLUMNS, Outcome, ResultShape, RowObject, TableDefinition
from ..utils.timezone import TimezoneManager
from .dialects import FOUND_ROWS_COLUMN, get_dialect
from .driver import DbApiDriver, Driver, Statement, param_type_for

logger = logging.getLogger(__name__)


class TableGateway:
    """
    Gateway for one relational table.

    Subclasses set ``definition`` (a TableDefinition or a mapping of its
    fields). A definition may also be passed to the constructor, which wins
    over the class attribute.
    """

    definition: ClassVar[Union[TableDefinition, Mapping[str, Any], None]] = None

    def __init__(
        self,
        driver: Any,
        config: Optional[GatewayConfig] = None,
        logger: Any = None,
        definition: Union[TableDefinition, Mapping[str, Any], None] = None
    ):
        """Initialize table gateway.

        Args:
            driver: A Driver, or a DB-API 2.0 connection to wrap in DbApiDriver
            config: Gateway settings (session actor, dialect, timezone)
            logger: Object with debug()/error() methods; statements are logged
                when a logger is given or debug logging is enabled
            definition: Table definition overriding the class attribute

        Raises:
            ConfigurationError: Invalid driver handle or table definition
        """
        self.config = config if config is not None else GatewayConfig.from_env()
        self.dialect = get_dialect(self.config.dialect)
        self.driver = self._resolve_driver(driver)
        self.table_definition = TableDefinition.build(
            definition if definition is not None else type(self).definition
        )

        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.log_statements = logger is not None or self.config.enable_debug_logging
        self.session_actor_id = self.config.session_actor_id

        # Audit timestamps are fixed for the lifetime of the gateway
        self.timezone_manager = TimezoneManager(self.config.default_timezone)
        self.reference_time: datetime = self.timezone_manager.now()

        # Per-call query state, reset by clear()
        self.sql: Optional[str] = None
        self.bind_values: List[Any] = []
        self.result_shape = ResultShape.ROWS_AS_OBJECTS
        self._calc_found_rows = False

        self.last_outcome: Optional[Outcome] = None
        self.last_error: Optional[str] = None
        self.last_exception: Optional[QueryExecutionError] = None
        self.affected_rows: Optional[int] = None
        self._last_insert_id: Any = None
        self._found_rows: Optional[int] = None

    def _resolve_driver(self, driver: Any) -> Driver:
        if isinstance(driver, Driver):
            return driver
        if callable(getattr(driver, "cursor", None)):
            return DbApiDriver(
                driver,
                placeholder=self.dialect.placeholder,
                autocommit=self.config.autocommit,
            )
        raise ConfigurationError(
            f"Invalid database connection provided, expected a Driver or DB-API connection, got {type(driver).__name__}"
        )

    # ------------------------------------------------------------------
    # Table definition shortcuts
    # ------------------------------------------------------------------

    @property
    def table(self) -> str:
        return self.table_definition.table

    @property
    def table_alias(self) -> Optional[str]:
        return self.table_definition.table_alias

    @property
    def primary_key(self) -> str:
        return self.table_definition.primary_key

    @property
    def modifiable_columns(self) -> List[str]:
        return list(self.table_definition.modifiable_columns)

    @property
    def audit_columns(self) -> bool:
        return self.table_definition.audit_columns

    # ------------------------------------------------------------------
    # Rows and finders
    # ------------------------------------------------------------------

    def make(self) -> RowObject:
        """Create a new, empty row of the configured row class."""
        return self.table_definition.row_class(
            column_types=self.table_definition.schema,
            primary_key=self.primary_key,
        )

    def find_by_id(self, id: Any) -> Optional[RowObject]:
        """Get one row by primary key.

        Uses the default SELECT restricted to the primary key unless SQL has
        been preset; ``id`` is always appended to the bind values.

        Returns:
            The row if found, None otherwise
        """
        if not self.sql:
            self.make_select()
            self.sql += f" and {self.table_definition.qualifier}.{self.primary_key} = ?"

        self.bind_values.append(id)

        return self.find_row()

    def find_row(self) -> Optional[Any]:
        """Run the pending (or default) SELECT and return its first row, or None."""
        if not self.sql:
            self.make_select()

        rows = self.execute()
        if not isinstance(rows, list) or not rows:
            return None
        return rows[0]

    def find(self, include_found_rows: bool = False) -> List[Any]:
        """Get table rows.

        Returns all rows, or the rows matching preset SQL.

        Args:
            include_found_rows: Also compute the total number of matching rows,
                available afterwards from found_rows_count()

        Returns:
            List of rows (row objects, or scalars for ResultShape.SCALAR);
            empty when the statement failed
        """
        if not self.sql:
            self.make_select(found_rows=include_found_rows)

        self._calc_found_rows = self._calc_found_rows or include_found_rows

        rows = self.execute()
        return rows if isinstance(rows, list) else []

    def found_rows_count(self) -> Optional[int]:
        """Total matching rows of the last find(include_found_rows=True).

        Every statement resets the count, so this returns None unless the most
        recent statement run by this gateway asked for it.
        """
        return self._found_rows

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, row: RowObject) -> Optional[RowObject]:
        """Insert a row without an identifier, update one with an identifier."""
        if self._has_identifier(row):
            return self.update(row)
        return self.insert(row)

    def insert(self, row: RowObject, ignore: bool = False) -> Optional[RowObject]:
        """Insert a new record from the row's assigned modifiable columns.

        Args:
            row: Row to insert
            ignore: Skip the row if it conflicts with an existing key

        Returns:
            The row with its identifier and audit fields set, or None when
            nothing was assigned or the statement failed (see last_outcome).
            A row skipped by ``ignore`` is returned unchanged, without an
            identifier.
        """
        columns = self._assigned_columns(row)

        if not columns:
            return self._nothing_to_write("insert")

        values = [row.get(column) for column in columns]

        if self.audit_columns:
            now = self.now()
            columns.extend(AUDIT_COLUMNS)
            values.extend([self.session_actor_id, now, self.session_actor_id, now])

        placeholders = ", ".join(["?"] * len(columns))
        self.sql = (
            f"{self.dialect.insert_into(self.table, ignore)} ({', '.join(columns)})"
            f" values ({placeholders}){self.dialect.insert_suffix(ignore)}"
        )
        self.bind_values.extend(values)

        if self.execute() is None:
            return None

        if self.affected_rows == 0:
            self.logger.debug(f"Insert into {self.table} was skipped by an existing row")
            return row

        if self._last_insert_id is not None:
            row.identifier = self._last_insert_id

        if self.audit_columns:
            row.load(dict(zip(AUDIT_COLUMNS, values[-len(AUDIT_COLUMNS):])))

        return row

    def update(self, row: RowObject) -> Optional[RowObject]:
        """Update a single record by primary key from the row's assigned columns.

        Returns:
            The row with updated_by/updated_date set, or None when nothing
            was assigned or the statement failed (see last_outcome)

        Raises:
            PreconditionError: If the row has no primary key value
        """
        if not self._has_identifier(row):
            raise PreconditionError(
                "A primary key id was not provided to update the record.",
                table_name=self.table,
                operation="update",
            )

        columns = self._assigned_columns(row)

        if not columns:
            return self._nothing_to_write("update")

        assignments = [f"{column} = ?" for column in columns]
        values = [row.get(column) for column in columns]

        if self.audit_columns:
            now = self.now()
            assignments.extend(["updated_by = ?", "updated_date = ?"])
            values.extend([self.session_actor_id, now])

        self.sql = f"update {self.table} set {', '.join(assignments)} where {self.primary_key} = ?"
        self.bind_values.extend(values)
        self.bind_values.append(row.identifier)

        if self.execute() is None:
            return None

        if self.audit_columns:
            row.load({"updated_by": self.session_actor_id, "updated_date": now})

        return row

    def delete(self, row: RowObject) -> bool:
        """Delete a single record by primary key.

        Raises:
            PreconditionError: If the row has no primary key value
        """
        if not self._has_identifier(row):
            raise PreconditionError(
                "A primary key id was not provided to delete this record.",
                table_name=self.table,
                operation="delete",
            )

        self.sql = f"delete from {self.table} where {self.primary_key} = ?"
        self.bind_values.append(row.identifier)

        return self.execute() is not None

    # ------------------------------------------------------------------
    # Reference time
    # ------------------------------------------------------------------

    def now(self) -> str:
        """Reference datetime of this gateway, ``YYYY-MM-DD HH:MM:SS``."""
        return self.timezone_manager.format_datetime(self.reference_time)

    def today(self) -> str:
        """Reference date of this gateway, ``YYYY-MM-DD``."""
        return self.timezone_manager.format_date(self.reference_time)

    # ------------------------------------------------------------------
    # Statement building and execution
    # ------------------------------------------------------------------

    def make_select(self, found_rows: bool = False) -> None:
        """Build the default SELECT if no SQL is pending.

        The statement ends in an always-true predicate so callers can append
        ``and ...`` conditions.

        Args:
            found_rows: Ask the database for the total number of matching rows
        """
        if self.sql is not None:
            return

        qualifier = self.table_definition.qualifier
        self.sql = f"select {self.dialect.select_list(qualifier, found_rows)} from {self.table}"
        if self.table_alias:
            self.sql += f" {self.table_alias}"
        self.sql += " where 1=1"
        self._calc_found_rows = found_rows

    def clear(self) -> None:
        """Reset the per-call query state."""
        self.sql = None
        self.bind_values = []
        self.result_shape = ResultShape.ROWS_AS_OBJECTS
        self._calc_found_rows = False

    def execute(self) -> Any:
        """Execute the pending SQL with the pending bind values.

        Returns:
            A list of rows for statements producing a result set, True for
            other successful statements, None when the driver failed
        """
        sql = self.sql
        bind_values = list(self.bind_values)

        self.affected_rows = None
        self._last_insert_id = None
        self._found_rows = None

        if self.log_statements:
            self.logger.debug(f"SQL Statement: {sql}")
            self.logger.debug(f"SQL Binds: {bind_values}")

        try:
            statement = self.driver.prepare(sql)

            for position, value in enumerate(bind_values, start=1):
                statement.bind_value(position, value, param_type_for(value))

            if not statement.execute():
                self._record_failure(sql, bind_values, statement.error_info)
                return None

            self.last_outcome = Outcome.SUCCESS
            self.last_error = None
            self.last_exception = None
            self.affected_rows = statement.affected_rows
            self._last_insert_id = statement.last_insert_id

            if statement.returns_rows:
                return self._shape_rows(statement)
            return True
        finally:
            self.clear()

    def _shape_rows(self, statement: Statement) -> List[Any]:
        rows = statement.fetch_all()

        if self._calc_found_rows:
            self._found_rows = self._read_found_rows(rows)

        if self.result_shape is ResultShape.SCALAR:
            return [next(iter(row.values()), None) for row in rows]

        return [self.table_definition.make_row(row) for row in rows]

    def _read_found_rows(self, rows: List[dict]) -> Optional[int]:
        if self.dialect.uses_found_rows_column:
            if not rows:
                return 0
            count = rows[0].get(FOUND_ROWS_COLUMN)
            for row in rows:
                row.pop(FOUND_ROWS_COLUMN, None)
            return int(count) if count is not None else None

        statement = self.driver.prepare(self.dialect.found_rows_sql)
        if not statement.execute():
            self.logger.error(f"Found rows query failed: {self.dialect.found_rows_sql} | error: {statement.error_info}")
            return None
        values = statement.fetch_column()
        return int(values[0]) if values else None

    def _record_failure(self, sql: str, bind_values: List[Any], error_info: Optional[str]) -> None:
        self.last_outcome = Outcome.FAILED
        self.last_error = error_info
        self.last_exception = QueryExecutionError(sql, bind_values, error_info)
        self.logger.error(f"Statement execution failed: {sql} | binds: {bind_values} | error: {error_info}")

    def _nothing_to_write(self, operation: str) -> None:
        self.logger.debug(f"Nothing to {operation} in {self.table}")
        self.last_outcome = Outcome.NOTHING_TO_WRITE
        self.last_error = None
        self.last_exception = None
        self.clear()
        return None

    def _assigned_columns(self, row: RowObject) -> List[str]:
        return [column for column in self.table_definition.modifiable_columns if row.is_modified(column)]

    def _has_identifier(self, row: RowObject) -> bool:
        return bool(row.identifier)


def create_table_gateway(
    driver: Any,
    definition: Union[TableDefinition, Mapping[str, Any]],
    config: Optional[GatewayConfig] = None,
    logger: Any = None
) -> TableGateway:
    """
    Factory function to create a TableGateway without a subclass.

    Args:
        driver: Driver or DB-API 2.0 connection
        definition: Table definition
        config: Gateway settings
        logger: Optional logger

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(driver, config=config, logger=logger, definition=definition)
