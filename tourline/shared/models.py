"""
Shared data models used across modules.

These models describe the backend's JSON envelope, not business entities.
Module-specific models should stay in their respective module directories.
"""

from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Pagination(BaseModel):
    """Pagination block returned alongside list endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(..., ge=1, description="Current page (1-indexed)")
    limit: int = Field(..., ge=0, description="Page size")
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")


class ApiResponse(BaseModel, Generic[T]):
    """
    Success envelope returned by every backend endpoint.

    Shape: { success: bool, data: T, pagination?: {...} }
    """

    success: bool = Field(..., description="Whether the call succeeded")
    data: T = Field(..., description="Endpoint payload")
    pagination: Optional[Pagination] = Field(None, description="Present on list endpoints")


class ApiErrorDetail(BaseModel):
    """The inner error object of a failed response."""

    model_config = ConfigDict(extra="ignore")

    code: Optional[str] = Field(None, description="Machine-readable error code")
    message: str = Field("", description="Human-readable message")


class ApiErrorBody(BaseModel):
    """
    Error envelope: { success: false, error: { code?, message } }.

    Legacy endpoints sometimes return a top-level "message" instead of
    the nested error object; both are accepted.
    """

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    error: Optional[ApiErrorDetail] = None
    message: Optional[str] = None

    @classmethod
    def parse(cls, body: Any) -> Optional["ApiErrorBody"]:
        """Parse an arbitrary decoded JSON body, returning None if it isn't an error envelope."""
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        if isinstance(error, str):
            body = {**body, "error": {"message": error}}
        try:
            return cls.model_validate(body)
        except ValueError:
            return None

    @property
    def error_message(self) -> Optional[str]:
        if self.error and self.error.message:
            return self.error.message
        return self.message

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None
