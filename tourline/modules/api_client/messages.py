"""
User-facing error messages.

Maps a failed call to a small closed set of user intents (ErrorMessage).
Resolution order:
1. the structured error code returned by the backend
2. the error taxonomy / HTTP status
3. substring matching on the raw message, for legacy unstructured errors

Step 3 recognizes both English and Spanish backend wording.
"""

from typing import Any, Optional

from .exceptions import ApiError, NetworkError
from .models import ErrorAction, ErrorMessage, ErrorType

DEFAULT_ERROR = ErrorMessage(
    title="Error",
    message="Something went wrong. Please try again.",
)

EMAIL_TAKEN = ErrorMessage(
    title="Email already registered",
    message="This email is already in use. Do you already have an account?",
    action=ErrorAction.LOGIN_OR_VERIFY,
)
USER_NOT_FOUND = ErrorMessage(
    title="User not found",
    message="There is no account with this email.",
)
INVALID_CREDENTIALS = ErrorMessage(
    title="Incorrect credentials",
    message="Email or password is incorrect. Please check your details.",
)
INVALID_CODE = ErrorMessage(
    title="Invalid code",
    message="The code you entered is not correct. Check it and try again.",
)
CODE_EXPIRED = ErrorMessage(
    title="Code expired",
    message="The code has expired. Request a new one.",
    action=ErrorAction.RESEND,
)
INVALID_RESET_LINK = ErrorMessage(
    title="Invalid link",
    message="The recovery link is not valid. Request a new one.",
)
RESET_LINK_EXPIRED = ErrorMessage(
    title="Link expired",
    message="The recovery link has expired. Request a new one.",
)
DUPLICATE_TAX_ID = ErrorMessage(
    title="Duplicate tax ID",
    message="This tax ID is already registered.",
)
PROVIDER_EXISTS = ErrorMessage(
    title="Provider already exists",
    message="A provider with these details is already registered.",
)
CONNECTION_ERROR = ErrorMessage(
    title="Connection error",
    message="Could not reach the server. Check your internet connection.",
    action=ErrorAction.RETRY,
)
SESSION_EXPIRED = ErrorMessage(
    title="Session expired",
    message="Your session has expired. Please sign in again.",
    action=ErrorAction.LOGIN,
)
ACCESS_DENIED = ErrorMessage(
    title="Access denied",
    message="You don't have permission to perform this action.",
)
NOT_FOUND = ErrorMessage(
    title="Not found",
    message="The requested resource does not exist or was removed.",
)
SERVER_ERROR = ErrorMessage(
    title="Server error",
    message="We're having trouble right now. Please try again later.",
    action=ErrorAction.RETRY,
)
INVALID_DATA = ErrorMessage(
    title="Invalid data",
    message="Please check that every field is filled in correctly.",
)
TOO_MANY_ATTEMPTS = ErrorMessage(
    title="Too many attempts",
    message="You've made too many requests. Please wait a moment.",
    action=ErrorAction.WAIT,
)

# Structured backend codes
CODE_MESSAGES: dict[str, ErrorMessage] = {
    "EMAIL_ALREADY_REGISTERED": EMAIL_TAKEN,
    "EMAIL_TAKEN": EMAIL_TAKEN,
    "USER_NOT_FOUND": USER_NOT_FOUND,
    "INVALID_CREDENTIALS": INVALID_CREDENTIALS,
    "INVALID_CODE": INVALID_CODE,
    "CODE_EXPIRED": CODE_EXPIRED,
    "INVALID_RESET_TOKEN": INVALID_RESET_LINK,
    "RESET_TOKEN_EXPIRED": RESET_LINK_EXPIRED,
    "DUPLICATE_TAX_ID": DUPLICATE_TAX_ID,
    "PROVIDER_EXISTS": PROVIDER_EXISTS,
    "TOKEN_EXPIRED": SESSION_EXPIRED,
    "INVALID_TOKEN": SESSION_EXPIRED,
    "FORBIDDEN": ACCESS_DENIED,
    "NOT_FOUND": NOT_FOUND,
    "VALIDATION_ERROR": INVALID_DATA,
    "RATE_LIMITED": TOO_MANY_ATTEMPTS,
}

_UNIQUE_MARKERS = ("unique", "constraint", "already", "existe", "registrado", "prisma")


def _raw_message(error: Any) -> str:
    if error is None:
        return ""
    if isinstance(error, ApiError):
        return error.message or ""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def _status(error: Any) -> Optional[int]:
    return error.status_code if isinstance(error, ApiError) else None


def _contains(text: str, *needles: str) -> bool:
    return any(needle in text for needle in needles)


def _match_legacy_message(lower: str) -> Optional[ErrorMessage]:
    """Substring fallback for errors without a structured code."""
    if _contains(lower, "email") and _contains(lower, *_UNIQUE_MARKERS):
        return EMAIL_TAKEN

    if _contains(lower, "usuario no encontrado", "user not found"):
        return USER_NOT_FOUND

    if _contains(lower, "credenciales", "contraseña", "password", "incorrect"):
        # Reset-link failures also mention the password
        if not (_contains(lower, "token") and _contains(lower, "reset")):
            return INVALID_CREDENTIALS

    if _contains(lower, "código", "code", "verification"):
        if _contains(lower, "inválido", "invalid", "incorrecto"):
            return INVALID_CODE
        if _contains(lower, "expirado", "expired"):
            return CODE_EXPIRED

    if _contains(lower, "token") and _contains(lower, "reset", "password"):
        if _contains(lower, "inválido", "invalid"):
            return INVALID_RESET_LINK
        if _contains(lower, "expirado", "expired"):
            return RESET_LINK_EXPIRED

    if _contains(lower, "tax", "rut", "rfc") and _contains(lower, "unique", "constraint", "duplicado"):
        return DUPLICATE_TAX_ID

    if _contains(lower, "provider") and _contains(lower, "unique", "constraint", "existe"):
        return PROVIDER_EXISTS

    return None


def parse_error(error: Any) -> ErrorMessage:
    """
    Translate any error into a user-presentable ErrorMessage.

    Never raises; unknown input falls back to a generic message.
    """
    if error is None:
        return DEFAULT_ERROR

    # Already translated upstream (e.g. SessionError)
    presentable = getattr(error, "error_message", None)
    if isinstance(presentable, ErrorMessage):
        return presentable

    if isinstance(error, ApiError) and error.backend_code in CODE_MESSAGES:
        return CODE_MESSAGES[error.backend_code]

    if isinstance(error, NetworkError):
        return CONNECTION_ERROR

    raw = _raw_message(error)
    lower = raw.lower()
    status = _status(error)

    legacy = _match_legacy_message(lower)
    if legacy is not None:
        return legacy

    if _contains(lower, "network", "internet", "timeout"):
        return CONNECTION_ERROR

    if status == 401 and _contains(lower, "token", "autenticación", "authentication"):
        return SESSION_EXPIRED

    if status == 403:
        return ACCESS_DENIED

    if status == 404:
        return NOT_FOUND

    if status is not None and status >= 500:
        return SERVER_ERROR

    if _contains(lower, "validación", "validation", "required", "requerido"):
        return INVALID_DATA

    if status == 429 or _contains(lower, "rate limit", "demasiados intentos"):
        return TOO_MANY_ATTEMPTS

    # A short, clean backend message is better than the generic copy
    if raw and len(raw) < 100 and "prisma" not in lower and "tx." not in lower:
        return ErrorMessage(title="Error", message=raw)

    return DEFAULT_ERROR


def get_error_message(error: Any) -> str:
    """Get just the user-facing message."""
    return parse_error(error).message


def get_error_action(error: Any) -> Optional[ErrorAction]:
    """Get the suggested follow-up action, if any."""
    return parse_error(error).action


def get_error_type(error: Any) -> ErrorType:
    """Classify an error into the coarse taxonomy."""
    error_type = getattr(error, "error_type", None)
    if isinstance(error_type, ErrorType):
        return error_type
    lower = _raw_message(error).lower()
    if _contains(lower, "network", "timeout"):
        return ErrorType.NETWORK
    return ErrorType.GENERIC


def is_network_error(error: Any) -> bool:
    """True if the error means no response was received."""
    return get_error_type(error) is ErrorType.NETWORK


def format_error_for_log(error: Any) -> str:
    """Technical one-liner for logs, including status and code."""
    log = f"Error: {_raw_message(error)}"
    status = _status(error)
    if status is not None:
        log += f" (Status: {status})"
    code = getattr(error, "backend_code", None) or getattr(error, "reason", None)
    if code:
        log += f" (Code: {code})"
    return log
