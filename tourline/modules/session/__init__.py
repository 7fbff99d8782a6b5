"""
Session module.

Authentication session lifecycle: bootstrap from persisted credentials,
sign-in/up/out, password reset, and user refresh.

Public API:
- ISessionManager / SessionManager: The session state machine
- IAuthApi / AuthApi: Backend auth endpoints
- SessionStatus, AuthResult, RefreshResult, RegisterRequest: Models
- SessionError: User-presentable auth failure
"""

from .interfaces import IAuthApi, ISessionManager, SessionListener
from .models import AuthResult, LoginRequest, RefreshResult, RegisterRequest, SessionStatus
from .api import AuthApi
from .service import SessionManager
from .exceptions import SessionError

__all__ = [
    # Interfaces
    "IAuthApi",
    "ISessionManager",
    "SessionListener",
    # Models
    "AuthResult",
    "LoginRequest",
    "RefreshResult",
    "RegisterRequest",
    "SessionStatus",
    # Implementations
    "AuthApi",
    "SessionManager",
    # Exceptions
    "SessionError",
]
