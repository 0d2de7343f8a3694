"""Authentication submodule – session state, login/logout, token and password encoding."""

from tz_router.auth.login import SessionManager
from tz_router.auth.password import (
    b64encode_text,
    encode_login_password,
    sha256_hex,
)
from tz_router.auth.session import Session, SessionState
from tz_router.auth.token import TokenProvider

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "TokenProvider",
    "b64encode_text",
    "encode_login_password",
    "sha256_hex",
]
