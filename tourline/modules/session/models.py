"""
Session module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tourline.modules.credentials.models import Role, UserSnapshot


class SessionStatus(str, Enum):
    """
    Session state machine.

    BOOTSTRAPPING is the initial state, left exactly once.
    """

    BOOTSTRAPPING = "bootstrapping"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class LoginRequest(BaseModel):
    """Body of the login call."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """
    Body of the registration call.

    Serialized with camelCase keys. The role drives which verification flow
    the app shows next; company_name is only meaningful for providers/admins.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: Role = Field(default=Role.TOURIST)
    company_name: Optional[str] = None
    phone: Optional[str] = None


class AuthResult(BaseModel):
    """Token and user returned by login/registration."""

    token: str = Field(..., min_length=1)
    user: UserSnapshot


class RefreshResult(BaseModel):
    """
    Outcome of refreshing the user snapshot.

    A failed refresh is not an error for the caller: it gets the previous
    snapshot back with stale=True.
    """

    user: Optional[UserSnapshot] = None
    stale: bool = False
    error: Optional[str] = None
