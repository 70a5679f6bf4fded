"""Pydantic models for API request/response."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Response model for a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User ID assigned by the store")
    name: str
    email: str


class UserCreateRequest(BaseModel):
    """Request model for creating a user.

    Fields are optional here so that missing values reach the service
    and are reported as a 400 rather than a schema error.
    """
    name: Optional[str] = None
    email: Optional[str] = None


class UserUpdateRequest(BaseModel):
    """Request model for updating a user. Omitted fields are left unchanged."""
    name: Optional[str] = None
    email: Optional[str] = None


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""
    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., description="Total number of users")
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")


class UserListResponse(BaseModel):
    """Response model for the paginated user list."""
    data: list[UserResponse]
    meta: PaginationMeta


class ErrorResponse(BaseModel):
    """Error payload returned by HTTPException handlers."""
    detail: str
