"""
Connectivity module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class AppState(str, Enum):
    """Application lifecycle states reported by the host platform."""

    ACTIVE = "active"
    BACKGROUND = "background"
    INACTIVE = "inactive"


class NetworkState(BaseModel):
    """
    A reachability reading.

    is_internet_reachable is None when the platform hasn't determined it yet;
    only an explicit False counts as unreachable.
    """

    model_config = {"frozen": True}

    is_connected: bool = Field(..., description="A network interface is up")
    is_internet_reachable: Optional[bool] = Field(
        None, description="The internet can be reached (None = unknown)"
    )
    connection_type: Optional[str] = Field(None, description="wifi, cellular, none, ...")

    @property
    def is_offline(self) -> bool:
        return not self.is_connected or self.is_internet_reachable is False

    @classmethod
    def online(cls, connection_type: Optional[str] = None) -> "NetworkState":
        return cls(is_connected=True, is_internet_reachable=True, connection_type=connection_type)

    @classmethod
    def offline(cls) -> "NetworkState":
        return cls(is_connected=False, is_internet_reachable=False, connection_type="none")


class DrainReport(BaseModel):
    """Outcome of one pass over the retry queue."""

    attempted: int = Field(default=0, ge=0)
    succeeded: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    errors: list[str] = Field(default_factory=list, description="One entry per failed replay")
