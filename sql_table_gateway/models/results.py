from enum import Enum


class ResultShape(str, Enum):
    """How rows returned by a SELECT are handed back to the caller."""
    ROWS_AS_OBJECTS = "rows_as_objects"
    SCALAR = "scalar"


class Outcome(str, Enum):
    """Result of the last gateway operation.

    Mutation methods return None both when there is nothing to write and when
    the driver fails; ``TableGateway.last_outcome`` tells the two apart.
    """
    SUCCESS = "success"
    NOTHING_TO_WRITE = "nothing_to_write"
    FAILED = "failed"
