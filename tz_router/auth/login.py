"""Login / logout state machine for the router admin session."""

from ..commands import GET_RANDOM_LOGIN, LOGIN, LOGOUT, Command, result_code
from ..config import ADMIN_USERNAME, COOKIE_NAME
from ..errors import AuthFailureError, RouterError, SaltMissingError
from ..logging_setup import log
from .password import b64encode_text, encode_login_password
from .session import SessionState


class SessionManager:
    """
    Drives authentication over a :class:`CommandClient` and owns its Session.

    States: ANONYMOUS -> AUTHENTICATING -> AUTHENTICATED -> ANONYMOUS (logout)
    or REAUTH_REQUIRED (reboot).  Login and logout hold the client lock for
    their whole duration, so they never overlap each other or any command.

    Usable as a context manager that logs out on exit.
    """

    def __init__(self, client) -> None:
        self._client = client

    @property
    def session(self):
        return self._client.session

    def is_authenticated(self) -> bool:
        client = self._client
        with client.lock:
            # Settles a finished reboot window so a dead cookie never reads as valid
            client.quiescence.poll(client.session)
            return client.session.authenticated

    def login(self, password: str) -> int | float:
        """
        Authenticate as the admin user.

          1. POST GET_RANDOM_LOGIN              -> salt in ``random_login``
          2. POST LOGIN username=base64("admin")
                        password=base64(sha256_hex(salt + password))
          3. success iff ``result`` <= 1

        Returns the router's ``result`` code (0 and 1 both mean success).
        Raises :class:`SaltMissingError` / :class:`AuthFailureError` on
        rejection; those are never retried automatically.
        """
        client = self._client
        session = client.session
        with client.lock:
            client.quiescence.check(session)
            fallback = (SessionState.REAUTH_REQUIRED
                        if session.state is SessionState.REAUTH_REQUIRED
                        else SessionState.ANONYMOUS)
            session.state = SessionState.AUTHENTICATING
            try:
                salt_reply = client.dispatch(Command.post(GET_RANDOM_LOGIN),
                                             require_session=False)
                # First occurrence of "random_login"
                salt = salt_reply.response.first_value("random_login")
                if salt is None or salt == "":
                    raise SaltMissingError(
                        f"no random_login in reply: {salt_reply.response.raw!r}"
                    )
                log.debug("Login salt: %s", salt)

                login_reply = client.dispatch(
                    Command.post(LOGIN, [
                        ("username", b64encode_text(ADMIN_USERNAME)),
                        ("password", encode_login_password(str(salt), password)),
                    ]),
                    require_session=False,
                )
                # First occurrence of "result"
                code = result_code(login_reply.response)
                if code is None or code > 1:
                    raise AuthFailureError(
                        f"login rejected: {login_reply.response.raw!r}"
                    )
            except Exception:
                session.clear(fallback)
                raise

            cookie = login_reply.cookie or salt_reply.cookie or session.cookie
            if cookie is None:
                log.warning("Login accepted but the router set no %r cookie", COOKIE_NAME)
            session.cookie = cookie
            session.state = SessionState.AUTHENTICATED
            log.info("Login successful (result=%s)", code)
            log.debug("Session cookie: %s", cookie)
            return code

    def logout(self) -> bool:
        """
        Best-effort LOGOUT.  Returns True iff ``result`` is exactly
        ``"success"``.  The local session is cleared whatever happens.
        """
        client = self._client
        with client.lock:
            try:
                reply = client.dispatch(Command.post(LOGOUT), require_session=False)
            finally:
                client.session.clear()
        # First occurrence of "result"; anything but the literal string fails
        ok = reply.response.first_value("result") == "success"
        if ok:
            log.info("Logged out")
        else:
            log.warning("Logout not confirmed by router: %r", reply.response.raw)
        return ok

    def __enter__(self) -> "SessionManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Nothing to do, or the router is rebooting and the cookie is already dead
        if self._client.quiescence.active or not self.is_authenticated():
            return
        try:
            self.logout()
        except RouterError as logout_exc:
            log.warning("Logout on exit failed: %s", logout_exc)
            if exc_type is None:
                raise
