"""Request suspension while the router reboots."""

import time

from .auth.session import Session, SessionState
from .config import REBOOT_QUIESCE_SECONDS
from .errors import QuiescenceActiveError
from .logging_setup import log


class QuiescencePolicy:
    """
    Blocks traffic to a router for *interval* seconds after a command that
    reboots it, then forces the session back to an unauthenticated state.

    Which commands reboot the device is caller-supplied metadata; the policy
    never retries the reboot command itself.
    """

    def __init__(self, interval: float = REBOOT_QUIESCE_SECONDS,
                 clock=time.monotonic, sleep=time.sleep) -> None:
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._deadline: float | None = None

    @property
    def active(self) -> bool:
        return self._deadline is not None and self._clock() < self._deadline

    def remaining(self) -> float:
        if self._deadline is None:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    def begin(self) -> None:
        self._deadline = self._clock() + self.interval
        log.warning("Reboot-inducing command sent; suspending requests for %.0fs",
                    self.interval)

    def poll(self, session: Session) -> bool:
        """
        Return True while the quiescent window is open.  Once it has closed,
        invalidate *session* (no I/O) and return False.
        """
        if self._deadline is None:
            return False
        if self.remaining() > 0:
            return True
        self._expire(session)
        return False

    def check(self, session: Session) -> None:
        """Raise while the quiescent window is open; invalidate *session* once it closes."""
        if self.poll(session):
            raise QuiescenceActiveError(self.remaining())

    def wait(self, session: Session) -> None:
        """Sleep out the rest of the quiescent window, then invalidate *session*."""
        if self._deadline is None:
            return
        remaining = self.remaining()
        if remaining > 0:
            log.info("Waiting %.0fs for the router to come back", remaining)
            self._sleep(remaining)
        self._expire(session)

    def _expire(self, session: Session) -> None:
        self._deadline = None
        # The pre-reboot cookie is dead
        session.clear(SessionState.REAUTH_REQUIRED)
        log.info("Quiescent interval over; login required before the next command")
