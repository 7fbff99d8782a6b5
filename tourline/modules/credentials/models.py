"""
Credential module data models.

These models define the persisted session (token + user snapshot) and the
canonical user representation exposed to the rest of the client.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """Closed set of user roles."""

    TOURIST = "tourist"
    GUIDE = "guide"
    ADMIN = "admin"
    PROVIDER = "provider"


# Backend spellings -> canonical role
ROLE_ALIASES: dict[str, Role] = {
    "tourist": Role.TOURIST,
    "user": Role.TOURIST,
    "guide": Role.GUIDE,
    "admin": Role.ADMIN,
    "super_admin": Role.ADMIN,
    "provider": Role.PROVIDER,
    "company": Role.PROVIDER,
}


def normalize_role(value: Any) -> Role:
    """
    Map a backend role value onto the canonical Role enum.

    Raises:
        ValueError: If the role is not recognized
    """
    if isinstance(value, Role):
        return value
    key = str(value).strip().lower()
    if key not in ROLE_ALIASES:
        raise ValueError(f"Unknown role: {value}")
    return ROLE_ALIASES[key]


class UserSnapshot(BaseModel):
    """
    Last-known profile of the signed-in user.

    Accepts the backend's camelCase payloads and serializes back to camelCase
    for storage. Replaced wholesale on every auth operation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    first_name: str = Field("", description="Given name")
    last_name: str = Field("", description="Family name")
    role: Role = Field(default=Role.TOURIST, description="Canonical role")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    # Profile fields
    phone: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    company_id: Optional[str] = None
    guide_profile_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: Any) -> Role:
        return normalize_role(value)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        # Some endpoints return numeric IDs
        return str(value) if value is not None else value

    @classmethod
    def from_backend(cls, payload: dict[str, Any]) -> "UserSnapshot":
        """Normalize a raw backend user payload into a snapshot."""
        return cls.model_validate(payload)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_guide(self) -> bool:
        return self.role is Role.GUIDE

    @property
    def is_tourist(self) -> bool:
        return self.role is Role.TOURIST

    @property
    def is_provider(self) -> bool:
        return self.role is Role.PROVIDER


class CredentialRecord(BaseModel):
    """
    A persisted session: the bearer token and the user it belongs to.

    Always written and cleared as a pair.
    """

    model_config = {"frozen": True}

    token: str = Field(..., min_length=1, description="Opaque bearer token")
    user: UserSnapshot = Field(..., description="User the token was issued for")
