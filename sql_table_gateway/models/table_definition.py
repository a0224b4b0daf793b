"""
Table Definition

Structural configuration of the one table a gateway maps: table name and
alias, primary key, the ordered list of columns eligible for insert/update,
whether the audit ("who") columns exist, the row class, and the declared
column types.

Definitions are validated once, when the gateway is constructed. Keys may be
given in snake_case or in the camelCase form used by table-definition
dictionaries (``tableAlias``, ``primaryKey``, ``modifiableColumns``,
``auditColumnsEnabled``, ``rowType``).
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError
from .row_object import ColumnType, RowObject

AUDIT_COLUMNS = ("created_by", "created_date", "updated_by", "updated_date")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_QUALIFIED_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class TableDefinition(BaseModel):
    """Configuration for one gateway's table."""

    table: str = Field(
        ...,
        description="Table name, optionally schema-qualified"
    )

    table_alias: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("table_alias", "tableAlias"),
        description="Alias used in generated SELECT statements"
    )

    primary_key: str = Field(
        default="id",
        validation_alias=AliasChoices("primary_key", "primaryKey"),
        description="Primary key column name"
    )

    modifiable_columns: List[str] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("modifiable_columns", "modifiableColumns"),
        description="Insertable/updatable columns in statement order, excluding the primary key and audit columns"
    )

    audit_columns: StrictBool = Field(
        default=True,
        validation_alias=AliasChoices("audit_columns", "auditColumnsEnabled", "who"),
        description="Whether created_by, created_date, updated_by and updated_date are maintained"
    )

    row_class: Type[RowObject] = Field(
        default=RowObject,
        validation_alias=AliasChoices("row_class", "rowType"),
        description="RowObject subclass produced by make() and the finders"
    )

    column_types: Dict[str, ColumnType] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("column_types", "columnTypes"),
        description="Declared scalar type per column"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('table')
    @classmethod
    def validate_table(cls, v):
        if not _QUALIFIED_IDENTIFIER.match(v):
            raise ValueError(f"Invalid table name: {v!r}")
        return v

    @field_validator('table_alias', 'primary_key')
    @classmethod
    def validate_identifier(cls, v):
        if v is not None and not _IDENTIFIER.match(v):
            raise ValueError(f"Invalid identifier: {v!r}")
        return v

    @field_validator('modifiable_columns')
    @classmethod
    def validate_modifiable_columns(cls, v):
        for column in v:
            if not _IDENTIFIER.match(column):
                raise ValueError(f"Invalid column name: {column!r}")
        if len(set(v)) != len(v):
            raise ValueError("modifiable_columns must not contain duplicates")
        audit = [column for column in v if column in AUDIT_COLUMNS]
        if audit:
            raise ValueError(f"Audit columns are managed by the gateway and cannot be modifiable: {audit}")
        return v

    @model_validator(mode='after')
    def validate_primary_key_not_modifiable(self):
        if self.primary_key in self.modifiable_columns:
            raise ValueError(f"Primary key '{self.primary_key}' cannot be a modifiable column")
        return self

    @property
    def qualifier(self) -> str:
        """Name used to qualify columns in SELECT statements."""
        return self.table_alias or self.table

    @property
    def schema(self) -> Dict[str, ColumnType]:
        """Declared column types, with the primary key typed integer unless declared."""
        return {self.primary_key: ColumnType.INTEGER, **self.column_types}

    def make_row(self, data: Optional[Mapping[str, Any]] = None) -> RowObject:
        """Create a row of the configured class from values loaded from storage."""
        return self.row_class.from_row(data or {}, column_types=self.schema, primary_key=self.primary_key)

    @classmethod
    def build(cls, definition: Union["TableDefinition", Mapping[str, Any], None]) -> "TableDefinition":
        """Validate a table definition.

        Args:
            definition: A TableDefinition or a mapping of definition fields

        Returns:
            Validated TableDefinition

        Raises:
            ConfigurationError: If the definition is missing or invalid
        """
        if isinstance(definition, cls):
            return definition

        if not isinstance(definition, Mapping):
            raise ConfigurationError(
                f"A table definition is required, got {type(definition).__name__}"
            )

        try:
            return cls.model_validate(dict(definition))
        except PydanticValidationError as e:
            errors = {
                ".".join(str(part) for part in error["loc"]) or "definition": error["msg"]
                for error in e.errors()
            }
            raise ConfigurationError(
                f"Invalid table definition for '{definition.get('table')}'",
                errors=errors,
                original_error=e,
            ) from e
