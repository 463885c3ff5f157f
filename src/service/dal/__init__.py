"""
Data Access Layer (DAL) for the monitoring forwarder.

The storage backend is only ever asked to insert one row. Handlers depend on
the narrow ``DalHandler`` protocol so tests can substitute a fake backend.
"""

from dataclasses import dataclass
from typing import Any, Dict, Protocol, runtime_checkable


@dataclass(frozen=True)
class InsertResult:
    """Outcome of an insert as reported by the storage backend."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class DalHandler(Protocol):
    """Protocol defining the data access layer interface."""

    def insert_record(self, table: str, record: Dict[str, Any]) -> InsertResult:
        """
        Insert one row into ``table``.

        Raises:
            UpstreamError: If the backend could not be reached in time
        """
        ...


__all__ = [
    "DalHandler",
    "InsertResult",
]
