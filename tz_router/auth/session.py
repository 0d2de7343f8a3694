"""Session value shared by the SessionManager and the CommandClient."""

from dataclasses import dataclass
from enum import Enum, auto


class SessionState(Enum):
    ANONYMOUS = auto()
    AUTHENTICATING = auto()
    AUTHENTICATED = auto()
    # Cookie dropped after a reboot; only login() may talk to the router
    REAUTH_REQUIRED = auto()


@dataclass
class Session:
    """
    Authentication state and cookie for one router.

    Created by the caller and handed to a CommandClient; one per router,
    never shared between routers.  Only login, logout and reboot
    invalidation change it.
    """

    cookie: str | None = None
    state: SessionState = SessionState.ANONYMOUS

    @property
    def authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def clear(self, state: SessionState = SessionState.ANONYMOUS) -> None:
        self.cookie = None
        self.state = state
