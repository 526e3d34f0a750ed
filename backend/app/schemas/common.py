"""
Common API Schemas

Pagination metadata, message wrappers and validators shared by the
resource schemas.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo


def reject_null(v: Any, info: ValidationInfo) -> Any:
    """
    For partial-update schemas: an omitted field means "leave unchanged",
    but an explicit null on a NOT NULL column is a client error.
    """
    if v is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return v


class PaginationMeta(BaseModel):
    """
    Pagination metadata included in list responses.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"total": 150, "offset": 0, "limit": 10, "returned": 10}
        }
    )

    total: int = Field(..., description="Total number of records matching the query")
    offset: int = Field(..., description="Number of records skipped")
    limit: int = Field(..., description="Maximum records per page")
    returned: int = Field(..., description="Number of records in this response")

    @classmethod
    def for_page(cls, total: int, page: int, page_size: int, returned: int) -> "PaginationMeta":
        return cls(total=total, offset=(page - 1) * page_size, limit=page_size, returned=returned)


class MessageResponse(BaseModel):
    """Confirmation body for operations that return no resource (delete)."""
    message: str = Field(..., description="Operation result message")
