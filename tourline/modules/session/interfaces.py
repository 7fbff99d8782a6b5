"""
Session module interfaces.

ISessionManager is what navigation and screens consume. IAuthApi is the
thin backend wrapper the manager depends on, so tests can substitute it.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from tourline.modules.credentials.models import Role, UserSnapshot

from .models import AuthResult, RefreshResult, RegisterRequest, SessionStatus

SessionListener = Callable[[SessionStatus, Optional[UserSnapshot]], None]


@runtime_checkable
class IAuthApi(Protocol):
    """Backend auth endpoints."""

    async def login(self, email: str, password: str) -> AuthResult:
        ...

    async def register(self, request: RegisterRequest) -> AuthResult:
        ...

    async def get_me(self) -> UserSnapshot:
        """
        Session check ("who am I").

        A 401 from this endpoint is treated by the API client as proof the
        stored token is invalid.
        """
        ...

    async def forgot_password(self, email: str) -> None:
        ...

    async def reset_password(self, token: str, new_password: str) -> None:
        ...

    async def verify_email(self, email: str, code: str) -> None:
        ...

    async def resend_verification(self, email: str) -> None:
        ...

    async def change_password(self, current_password: str, new_password: str) -> None:
        ...


@runtime_checkable
class ISessionManager(Protocol):
    """
    Interface for the authenticated-user state machine.
    """

    @property
    def status(self) -> SessionStatus:
        ...

    @property
    def user(self) -> Optional[UserSnapshot]:
        ...

    async def bootstrap(self) -> SessionStatus:
        """Resolve the initial state from persisted credentials. Runs once."""
        ...

    async def sign_in(self, email: str, password: str) -> UserSnapshot:
        """
        Raises:
            SessionError: With a user-presentable message; state is unchanged
        """
        ...

    async def sign_up(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: Role = Role.TOURIST,
        company_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> UserSnapshot:
        ...

    async def sign_out(self) -> None:
        """Always ends Unauthenticated; never raises."""
        ...

    async def reset_password(self, email: str) -> None:
        ...

    async def refresh_user(self) -> RefreshResult:
        """Re-fetch the user snapshot. Failures yield a stale result, not an exception."""
        ...
