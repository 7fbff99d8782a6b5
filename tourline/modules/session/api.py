"""
Backend auth endpoints.

Thin typed wrapper over IApiClient. It doesn't touch the credential store;
persisting the returned credentials is the session manager's job.
"""

from typing import Any

from tourline.modules.api_client.interfaces import IApiClient
from tourline.modules.credentials.models import UserSnapshot

from .interfaces import IAuthApi
from .models import AuthResult, LoginRequest, RegisterRequest

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
ME_PATH = "/auth/me"
FORGOT_PASSWORD_PATH = "/auth/forgot-password"
RESET_PASSWORD_PATH = "/auth/reset-password"
VERIFY_EMAIL_PATH = "/auth/verify-email"
RESEND_VERIFICATION_PATH = "/auth/resend-verification"
CHANGE_PASSWORD_PATH = "/auth/change-password"


class AuthApi(IAuthApi):
    """IAuthApi backed by the shared API client."""

    def __init__(self, client: IApiClient, me_path: str = ME_PATH):
        """
        Args:
            client: API client used for every call
            me_path: Session-check path; must match the client's session_check_path
        """
        self._client = client
        self._me_path = me_path

    async def login(self, email: str, password: str) -> AuthResult:
        body = LoginRequest(email=email, password=password).model_dump()
        envelope = await self._client.request_envelope("POST", LOGIN_PATH, json=body)
        return AuthResult.model_validate(envelope.data)

    async def register(self, request: RegisterRequest) -> AuthResult:
        body = request.model_dump(mode="json", by_alias=True, exclude_none=True)
        envelope = await self._client.request_envelope("POST", REGISTER_PATH, json=body)
        return AuthResult.model_validate(envelope.data)

    async def get_me(self) -> UserSnapshot:
        envelope = await self._client.request_envelope("GET", self._me_path)
        return UserSnapshot.from_backend(_unwrap_user(envelope.data))

    async def forgot_password(self, email: str) -> None:
        await self._client.request_envelope("POST", FORGOT_PASSWORD_PATH, json={"email": email})

    async def reset_password(self, token: str, new_password: str) -> None:
        await self._client.request_envelope(
            "POST", RESET_PASSWORD_PATH, json={"token": token, "newPassword": new_password}
        )

    async def verify_email(self, email: str, code: str) -> None:
        await self._client.request_envelope(
            "POST", VERIFY_EMAIL_PATH, json={"email": email, "code": code}
        )

    async def resend_verification(self, email: str) -> None:
        await self._client.request_envelope(
            "POST", RESEND_VERIFICATION_PATH, json={"email": email}
        )

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self._client.request_envelope(
            "PATCH",
            CHANGE_PASSWORD_PATH,
            json={"currentPassword": current_password, "newPassword": new_password},
        )


def _unwrap_user(data: Any) -> Any:
    # Some backend versions nest the profile under "user"
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        return data["user"]
    return data
