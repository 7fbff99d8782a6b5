"""
Session manager implementation.

Owns the Bootstrapping -> {Unauthenticated, Authenticated} state machine.
One instance is created by the composition root and passed by reference to
whatever needs it; there is no module-level session.
"""

import asyncio
import logging
from typing import Optional

from tourline.shared.config import Settings, get_settings
from tourline.modules.api_client.exceptions import NetworkError
from tourline.modules.api_client.messages import format_error_for_log
from tourline.modules.credentials.interfaces import ICredentialStore
from tourline.modules.credentials.models import CredentialRecord, Role, UserSnapshot

from .interfaces import IAuthApi, ISessionManager, SessionListener
from .models import AuthResult, RefreshResult, RegisterRequest, SessionStatus
from .exceptions import SessionError

logger = logging.getLogger(__name__)


class SessionManager(ISessionManager):
    """
    Authenticated-user state consumed by navigation and screens.

    Sign-in/up failures leave the state untouched and raise SessionError.
    Sign-out always succeeds locally. A failed refresh returns the previous
    snapshot marked stale.
    """

    def __init__(
        self,
        credential_store: ICredentialStore,
        auth_api: IAuthApi,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._credentials = credential_store
        self._auth_api = auth_api
        self._status = SessionStatus.BOOTSTRAPPING
        self._user: Optional[UserSnapshot] = None
        self._ready = asyncio.Event()
        self._bootstrap_task: Optional[asyncio.Task] = None
        self._listeners: list[SessionListener] = []

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def user(self) -> Optional[UserSnapshot]:
        return self._user

    @property
    def is_loading(self) -> bool:
        return self._status is SessionStatus.BOOTSTRAPPING

    @property
    def is_authenticated(self) -> bool:
        return self._status is SessionStatus.AUTHENTICATED

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.is_admin

    @property
    def is_guide(self) -> bool:
        return self._user is not None and self._user.is_guide

    @property
    def is_tourist(self) -> bool:
        return self._user is not None and self._user.is_tourist

    @property
    def is_provider(self) -> bool:
        return self._user is not None and self._user.is_provider

    def subscribe(self, listener: SessionListener) -> None:
        """Register a callback invoked with (status, user) after every change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def bootstrap(self) -> SessionStatus:
        # Concurrent callers share the single run
        if self._bootstrap_task is None:
            self._bootstrap_task = asyncio.ensure_future(self._run_bootstrap())
        await self._bootstrap_task
        return self._status

    async def wait_until_ready(self) -> SessionStatus:
        """Block until bootstrap has resolved. Navigation waits on this."""
        await self._ready.wait()
        return self._status

    async def sign_in(self, email: str, password: str) -> UserSnapshot:
        try:
            result = await self._auth_api.login(email, password)
            await self._persist(result)
        except Exception as e:
            logger.error(f"Sign in failed: {format_error_for_log(e)}")
            raise SessionError.from_error(e, operation="sign_in") from e

        self._set_state(SessionStatus.AUTHENTICATED, result.user)
        logger.info(f"Signed in as {result.user.id} ({result.user.role.value})")
        return result.user

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
        try:
            request = RegisterRequest(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password,
                role=role,
                company_name=company_name,
                phone=phone,
            )
            result = await self._auth_api.register(request)
            await self._persist(result)
        except Exception as e:
            logger.error(f"Sign up failed: {format_error_for_log(e)}")
            raise SessionError.from_error(e, operation="sign_up") from e

        self._set_state(SessionStatus.AUTHENTICATED, result.user)
        logger.info(f"Registered {result.user.id} as {result.user.role.value}")
        return result.user

    async def sign_out(self) -> None:
        try:
            await self._credentials.clear()
        except Exception as e:
            # Local state wins for sign-out
            logger.error(f"Failed to clear credentials during sign out: {e}")

        self._set_state(SessionStatus.UNAUTHENTICATED, None)
        logger.info("Signed out")

    async def reset_password(self, email: str) -> None:
        try:
            await self._auth_api.forgot_password(email)
        except Exception as e:
            logger.error(f"Password reset request failed: {format_error_for_log(e)}")
            raise SessionError.from_error(e, operation="reset_password") from e

    async def refresh_user(self) -> RefreshResult:
        if self._status is not SessionStatus.AUTHENTICATED:
            return RefreshResult(user=self._user, stale=True, error="Not signed in")

        try:
            user = await self._auth_api.get_me()
            await self._credentials.update_user(user)
        except Exception as e:
            logger.warning(f"Failed to refresh user, keeping stale snapshot: {format_error_for_log(e)}")
            return RefreshResult(user=self._user, stale=True, error=str(e))

        self._set_state(self._status, user)
        return RefreshResult(user=user, stale=False)

    async def _run_bootstrap(self) -> None:
        try:
            status, user = await self._resolve_stored_session()
            self._set_state(status, user)
            logger.info(f"Session bootstrap resolved: {status.value}")
        finally:
            self._ready.set()

    async def _resolve_stored_session(self) -> tuple[SessionStatus, Optional[UserSnapshot]]:
        try:
            record = await self._credentials.load()
        except Exception as e:
            logger.error(f"Error loading stored credentials: {e}")
            return SessionStatus.UNAUTHENTICATED, None

        if record is None:
            return SessionStatus.UNAUTHENTICATED, None

        try:
            user = await self._auth_api.get_me()
        except NetworkError as e:
            if self._settings.bootstrap_keep_session_offline:
                logger.warning(f"Session check unreachable, keeping stored session: {e}")
                return SessionStatus.AUTHENTICATED, record.user
            logger.warning(f"Session check unreachable, signing out: {e}")
            await self._discard_credentials()
            return SessionStatus.UNAUTHENTICATED, None
        except Exception as e:
            logger.warning(f"Stored session is no longer valid: {format_error_for_log(e)}")
            await self._discard_credentials()
            return SessionStatus.UNAUTHENTICATED, None

        try:
            await self._credentials.save(CredentialRecord(token=record.token, user=user))
        except Exception as e:
            logger.error(f"Failed to persist refreshed user snapshot: {e}")
        return SessionStatus.AUTHENTICATED, user

    async def _discard_credentials(self) -> None:
        # The API client may already have cleared them on a 401
        try:
            if await self._credentials.has_credentials():
                await self._credentials.clear()
        except Exception as e:
            logger.error(f"Failed to clear credentials: {e}")

    async def _persist(self, result: AuthResult) -> None:
        await self._credentials.save(CredentialRecord(token=result.token, user=result.user))

    def _set_state(self, status: SessionStatus, user: Optional[UserSnapshot]) -> None:
        self._status = status
        self._user = user
        for listener in list(self._listeners):
            try:
                listener(status, user)
            except Exception:
                logger.exception("Session listener failed")
