"""
Driver Contract and DB-API Adapter

The gateway never talks to a database module directly. It asks a ``Driver``
to prepare a statement, binds positional values with a type tag, executes it,
and reads rows, the affected row count and the generated id back from that
statement. Drivers report failure by
returning False from ``Statement.execute()`` and exposing a diagnostic in
``Statement.error_info``; they do not raise for statement errors.

``DbApiDriver`` adapts any DB-API 2.0 connection (sqlite3, pymysql,
psycopg2, ...) to this contract. The connection stays owned by the caller:
the driver never closes it.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ParamType(str, Enum):
    """Type tag attached to each positional bind value."""
    INT = "int"
    NULL = "null"
    STR = "str"


def param_type_for(value: Any) -> ParamType:
    """Derive the bind type tag from a value's runtime type."""
    if isinstance(value, int):
        return ParamType.INT
    if value is None or (isinstance(value, str) and value == ""):
        return ParamType.NULL
    return ParamType.STR


class Statement(ABC):
    """A prepared statement.

    After a successful execute(), ``affected_rows`` holds the row count the
    database reported (-1 when unknown) and ``last_insert_id`` the id this
    statement generated, or None when it inserted nothing.
    """

    sql: str
    error_info: Optional[str] = None
    affected_rows: int = -1
    last_insert_id: Any = None

    @abstractmethod
    def bind_value(self, position: int, value: Any, param_type: ParamType) -> None:
        """Bind a value to a 1-based placeholder position."""

    @abstractmethod
    def execute(self) -> bool:
        """Run the statement. Returns False when the database rejected it."""

    @property
    @abstractmethod
    def returns_rows(self) -> bool:
        """True if the executed statement produced a result set."""

    @abstractmethod
    def fetch_all(self) -> List[Dict[str, Any]]:
        """Return all remaining rows as column-name mappings."""

    @abstractmethod
    def fetch_column(self) -> List[Any]:
        """Return the first column of all remaining rows."""


class Driver(ABC):
    """Connection-level execution primitive used by TableGateway."""

    @abstractmethod
    def prepare(self, sql: str) -> Statement:
        """Prepare a statement written with ``?`` placeholders."""


class DbApiStatement(Statement):
    """Statement executed through a DB-API cursor."""

    def __init__(self, driver: "DbApiDriver", sql: str):
        self.sql = sql
        self.error_info = None
        self._driver = driver
        self._params: Dict[int, Any] = {}
        self._cursor = None

    def bind_value(self, position: int, value: Any, param_type: ParamType) -> None:
        if position < 1:
            raise ValueError(f"Bind positions start at 1, got {position}")

        if param_type is ParamType.NULL:
            value = None
        elif param_type is ParamType.INT:
            value = int(value)
        elif not isinstance(value, (str, bytes)):
            value = str(value)

        self._params[position] = value

    def execute(self) -> bool:
        params = [self._params[position] for position in sorted(self._params)]
        connection = self._driver.connection
        cursor = connection.cursor()

        try:
            cursor.execute(self._driver.translate(self.sql), params)
        except self._driver.error_class as e:
            self.error_info = f"{type(e).__name__}: {e}"
            cursor.close()
            if self._driver.autocommit:
                connection.rollback()
            return False

        self._cursor = cursor
        self.affected_rows = cursor.rowcount
        # An ignored INSERT leaves lastrowid at an earlier row
        self.last_insert_id = (cursor.lastrowid or None) if cursor.rowcount != 0 else None

        if not self.returns_rows and self._driver.autocommit:
            connection.commit()

        return True

    @property
    def returns_rows(self) -> bool:
        return self._cursor is not None and self._cursor.description is not None

    def fetch_all(self) -> List[Dict[str, Any]]:
        if not self.returns_rows:
            return []
        columns = [description[0] for description in self._cursor.description]
        try:
            return [dict(zip(columns, row)) for row in self._cursor.fetchall()]
        finally:
            self._cursor.close()

    def fetch_column(self) -> List[Any]:
        if not self.returns_rows:
            return []
        try:
            return [row[0] for row in self._cursor.fetchall()]
        finally:
            self._cursor.close()


class DbApiDriver(Driver):
    """
    Driver over a DB-API 2.0 connection.

    Generated SQL uses ``?`` placeholders; drivers with the ``format`` or
    ``pyformat`` paramstyle get them rewritten to ``%s``.
    """

    def __init__(
        self,
        connection: Any,
        placeholder: str = "?",
        autocommit: bool = True,
        error_class: Optional[Type[Exception]] = None
    ):
        """Initialize driver.

        Args:
            connection: DB-API 2.0 connection, owned by the caller
            placeholder: Placeholder expected by the database module ("?" or "%s")
            autocommit: Commit after each successful write, roll back after a failure
            error_class: Exception class signalling statement failure; defaults to
                the connection's ``Error`` attribute

        Raises:
            ConfigurationError: If ``connection`` is not a DB-API connection
        """
        if not callable(getattr(connection, "cursor", None)):
            raise ConfigurationError(
                f"Invalid database connection provided, expected a DB-API connection, got {type(connection).__name__}"
            )
        if placeholder not in ("?", "%s"):
            raise ConfigurationError(f"Unsupported placeholder style: {placeholder!r}")

        self.connection = connection
        self.placeholder = placeholder
        self.autocommit = autocommit
        self.error_class = error_class or getattr(connection, "Error", None) or Exception

    def translate(self, sql: str) -> str:
        """Rewrite ``?`` placeholders to the database module's style."""
        if self.placeholder == "?":
            return sql
        return sql.replace("%", "%%").replace("?", self.placeholder)

    def prepare(self, sql: str) -> DbApiStatement:
        return DbApiStatement(self, sql)
