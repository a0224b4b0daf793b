"""
Row Object and Column Type Coercion

A RowObject is the in-memory form of one table row: an explicit mapping from
column name to value, the set of columns the caller has assigned, and the name
of the primary-key column whose value is the row's identifier.

## Modification Tracking

The gateway decides which columns go into an INSERT or UPDATE from
``modified_columns`` alone, so a row distinguishes "not provided" from
"provided as None":

```python
row = RowObject(column_types={"title": ColumnType.STRING})
row.set("body", None)
row.is_modified("body")   # True  -> written as NULL
row.is_modified("title")  # False -> left out of the statement
```

There are two construction paths:

- ``RowObject(data)`` / ``RowObject(title="x")`` is caller-side bulk assignment:
  every key is marked modified.
- ``RowObject.from_row(data)`` is the state loaded from storage: nothing is
  marked modified. Gateway finders always use this path, so a fetched row
  followed by ``row.title = "new"`` updates only ``title``.

## Type Coercion

``coerce_value`` is the single conversion routine behind every assignment
path. Declared types come from the table definition's ``column_types`` schema
(merged with a row subclass's own ``column_types``); undeclared columns are
stored untouched.
"""

import logging
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Iterator, Mapping, Optional

from pydantic import ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


class ColumnType(str, Enum):
    """Scalar column types a table schema can declare."""
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"
    BOOLEAN = "boolean"


_ADAPTERS: Dict[ColumnType, TypeAdapter] = {
    ColumnType.INTEGER: TypeAdapter(int),
    ColumnType.REAL: TypeAdapter(float),
    ColumnType.STRING: TypeAdapter(str, config=ConfigDict(coerce_numbers_to_str=True)),
    ColumnType.BOOLEAN: TypeAdapter(bool),
}


def coerce_value(column_type: Optional[ColumnType], value: Any, column: Optional[str] = None) -> Any:
    """Coerce a value to a declared column type.

    Args:
        column_type: Declared type of the column, or None if undeclared
        value: Incoming value
        column: Column name, used for error context only

    Returns:
        The converted value. None and "" become None for any declared type;
        values for undeclared columns are returned unchanged.

    Raises:
        ValidationError: If the value cannot be converted to the declared type
    """
    if column_type is None:
        return value

    if value is None or (isinstance(value, str) and value == ""):
        return None

    try:
        return _ADAPTERS[ColumnType(column_type)].validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Cannot coerce value to {ColumnType(column_type).value}",
            column=column,
            value=value,
            original_error=e,
        ) from e


class RowObject:
    """
    Mutable representation of one table row.

    Values are reachable through ``get``/``set``, item access
    (``row["title"]``) and attribute access (``row.title``). Unknown public
    attributes read as None. Columns whose names clash with RowObject's own
    attributes (``get``, ``set``, ``identifier``, ...) are only reachable
    through ``get``/``set`` or item access.

    Subclass to add domain behaviour; a subclass may declare its own
    ``column_types`` which are merged under the table definition's schema.
    """

    column_types: ClassVar[Dict[str, ColumnType]] = {}

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        *,
        column_types: Optional[Mapping[str, ColumnType]] = None,
        primary_key: str = "id",
        **values: Any
    ):
        """Create a row, treating ``data`` and ``values`` as caller assignments.

        Args:
            data: Initial column values, marked modified
            column_types: Declared column types (merged over the class schema)
            primary_key: Name of the primary-key column
            **values: More initial column values, marked modified
        """
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_modified", set())
        object.__setattr__(self, "_primary_key", primary_key)
        object.__setattr__(
            self,
            "_column_types",
            {**type(self).column_types, **dict(column_types or {})},
        )

        for name, value in {**dict(data or {}), **values}.items():
            self.set(name, value)

    @classmethod
    def from_row(
        cls,
        data: Mapping[str, Any],
        *,
        column_types: Optional[Mapping[str, ColumnType]] = None,
        primary_key: str = "id"
    ) -> "RowObject":
        """Create a row from values loaded from storage.

        Values are coerced but not marked modified.
        """
        row = cls(column_types=column_types, primary_key=primary_key)
        row.load(data)
        return row

    # ------------------------------------------------------------------
    # Column access
    # ------------------------------------------------------------------

    def get(self, name: str, default: Any = None) -> Any:
        """Return a column value, or ``default`` if the column is not set."""
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Assign a column value and mark the column modified."""
        self._values[name] = self._coerce(name, value)
        self._modified.add(name)

    def load(self, values: Mapping[str, Any]) -> None:
        """Apply values as persisted state, without marking them modified."""
        for name, value in values.items():
            self._values[name] = self._coerce(name, value)

    def has(self, name: str) -> bool:
        """True if the column currently holds a value (assigned or loaded)."""
        return name in self._values

    def is_modified(self, name: str) -> bool:
        return name in self._modified

    @property
    def modified_columns(self) -> FrozenSet[str]:
        return frozenset(self._modified)

    @property
    def primary_key(self) -> str:
        return self._primary_key

    @property
    def identifier(self) -> Any:
        """Value of the primary-key column, None for rows not yet persisted."""
        return self._values.get(self._primary_key)

    @identifier.setter
    def identifier(self, value: Any) -> None:
        self._values[self._primary_key] = self._coerce(self._primary_key, value)

    def column_type(self, name: str) -> Optional[ColumnType]:
        return self._column_types.get(name)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def _coerce(self, name: str, value: Any) -> Any:
        return coerce_value(self._column_types.get(name), value, column=name)

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        return self._values.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RowObject):
            return NotImplemented
        return type(self) is type(other) and self._values == other._values

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._values!r})"
