from typing import Any, Dict, Optional


class TableGatewayError(Exception):
    """Root of every error raised by a table gateway.

    Gateway errors describe one table operation. ``context`` carries the
    details a caller needs to reproduce it (table, operation, column, SQL text
    and bind values); ``original_error`` is the driver or pydantic exception
    underneath, when there is one.

    Rendered as ``<message> [key=value; ...] (caused by <Type>: <error>)``.
    Context values are shown with ``repr`` so SQL text and bind values keep
    their quoting.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.context:
            details = "; ".join(f"{key}={value!r}" for key, value in self.context.items())
            parts.append(f"[{details}]")
        if self.original_error is not None:
            parts.append(f"(caused by {type(self.original_error).__name__}: {self.original_error})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"
