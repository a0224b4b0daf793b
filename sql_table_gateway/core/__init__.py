"""
Core infrastructure for table gateways.

- TableGateway: statement building and execution for one table
- Driver contract and the DB-API adapter
- SQL dialect descriptions
"""

from .dialects import DIALECTS, Dialect, get_dialect
from .driver import DbApiDriver, DbApiStatement, Driver, ParamType, Statement, param_type_for
from .table_gateway import TableGateway, create_table_gateway

__all__ = [
    "DIALECTS",
    "DbApiDriver",
    "DbApiStatement",
    "Dialect",
    "Driver",
    "ParamType",
    "Statement",
    "TableGateway",
    "create_table_gateway",
    "get_dialect",
    "param_type_for",
]
