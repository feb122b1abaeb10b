"""
Response Envelope

Every endpoint answers with the same wrapper:

    {
        "success": true,
        "message": "Dune was added",
        "data": {...}
    }

Failures carry ``error`` instead of ``data``; list and bulk-delete
responses also echo the applied query-string filters as ``query``.

Services return a ServiceResult (status code + envelope) so the status
code decision lives next to the business rule that makes it, and routers
only have to render it.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """The {success, message, data|error} wrapper used by every endpoint."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    query: Optional[dict[str, str]] = Field(
        default=None,
        description="Echo of the query-string filters, for list endpoints",
    )
    data: Optional[DataT] = Field(default=None, description="Payload on success")
    error: Optional[Any] = Field(default=None, description="Error detail on failure")

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """
        Serialize for a JSONResponse.

        Unset optional members are left out, and nested camelCase aliases
        (deletedCount, beforeUpdate, ...) are applied.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class ServiceResult(Generic[DataT]):
    """
    Outcome of a service operation: HTTP status plus the envelope.

    Attributes:
        status_code: HTTP status the router should answer with
        envelope: Body to send (dropped on the wire for 204/304)
    """

    status_code: int
    envelope: Envelope[DataT]

    @property
    def data(self) -> Optional[DataT]:
        return self.envelope.data
