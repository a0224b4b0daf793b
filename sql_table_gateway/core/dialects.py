"""
SQL Dialects

The gateway writes one statement shape for every database; the few places
where databases differ are described here:

- how a SELECT asks for the total number of matching rows ("found rows"),
- how an INSERT skips rows that conflict with an existing key,
- which placeholder the DB-API driver expects.

Two found-rows mechanisms exist:

- ``window``: the select list gains ``count(*) over () as _found_rows``; the
  gateway reads the count from the first row and strips the column.
- ``calc``: MySQL's ``SQL_CALC_FOUND_ROWS`` modifier, read back with
  ``select found_rows()`` right after the query.
"""

from dataclasses import dataclass
from typing import Dict, Optional

FOUND_ROWS_COLUMN = "_found_rows"


@dataclass(frozen=True)
class Dialect:
    """Statement fragments that differ between databases."""

    name: str
    insert_ignore_prefix: str
    insert_ignore_suffix: str = ""
    calc_found_rows_modifier: Optional[str] = None
    found_rows_sql: Optional[str] = None
    placeholder: str = "?"

    @property
    def uses_found_rows_column(self) -> bool:
        return self.calc_found_rows_modifier is None

    def select_list(self, qualifier: str, found_rows: bool = False) -> str:
        """Build the select list for ``qualifier.*``, optionally asking for found rows."""
        columns = f"{qualifier}.*"
        if not found_rows:
            return columns
        if self.uses_found_rows_column:
            return f"{columns}, count(*) over () as {FOUND_ROWS_COLUMN}"
        return f"{self.calc_found_rows_modifier} {columns}"

    def insert_into(self, table: str, ignore: bool = False) -> str:
        """Opening words of an INSERT statement."""
        if ignore:
            return f"{self.insert_ignore_prefix} into {table}"
        return f"insert into {table}"

    def insert_suffix(self, ignore: bool = False) -> str:
        return self.insert_ignore_suffix if ignore else ""


SQLITE = Dialect(
    name="sqlite",
    insert_ignore_prefix="insert or ignore",
)

MYSQL = Dialect(
    name="mysql",
    insert_ignore_prefix="insert ignore",
    calc_found_rows_modifier="SQL_CALC_FOUND_ROWS",
    found_rows_sql="select found_rows()",
    placeholder="%s",
)

POSTGRESQL = Dialect(
    name="postgresql",
    insert_ignore_prefix="insert",
    insert_ignore_suffix=" on conflict do nothing",
    placeholder="%s",
)

DIALECTS: Dict[str, Dialect] = {
    dialect.name: dialect for dialect in (SQLITE, MYSQL, POSTGRESQL)
}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name.

    Raises:
        KeyError: If the dialect is unknown
    """
    return DIALECTS[name.lower()]
