"""
HTTP client for the router's command endpoints.

All traffic goes through :class:`CommandClient`:

  • GET  /reqproc/proc_get   cmd=<name>&isTest=false[&multi_data=1]&…
  • POST /reqproc/proc_post  goformId=<name>&isTest=false[&CSRFToken=…]&…

Every POST is preceded by a fresh ``get_token`` round trip made inside the
same locked section, so no other request can slip between the token fetch
and the POST that consumes it.
"""

import threading
import time
from typing import NamedTuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..auth.session import Session, SessionState
from ..auth.token import TokenProvider
from ..commands import Command, Method
from ..config import (
    COOKIE_NAME,
    DEFAULT_HOST,
    GET_PATH,
    POST_PATH,
    REQUEST_TIMEOUT,
    RETRY_BACKOFF,
    TRANSPORT_RETRIES,
    USER_AGENT,
)
from ..errors import ReauthenticationRequiredError, TransportError
from ..logging_setup import log
from ..parser import ParsedResponse, parse_response
from ..quiescence import QuiescencePolicy

# Form fields owned by the client; callers may not override them
_RESERVED_POST_FIELDS = frozenset({"goformId", "isTest", "CSRFToken"})
_RESERVED_GET_FIELDS = frozenset({"cmd", "isTest", "multi_data"})


def build_session(verify_ssl: bool = True) -> requests.Session:
    """Return a requests.Session with keep-alive and a browser User-Agent."""
    session = requests.Session()
    # No transport-level retries: CommandClient retries whole commands so that
    # each POST attempt carries a freshly fetched token.
    retry = Retry(total=0, read=False, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str) -> str:
    """Build the base URL for the router (``http://`` unless a scheme is given)."""
    if "://" in host:
        return host.rstrip("/")
    return f"http://{host}"


class Reply(NamedTuple):
    """Parsed reply plus the session cookie the router set on this exchange, if any."""

    response: ParsedResponse
    cookie: str | None


class CommandClient:
    """
    Sends GET/POST commands for one router session.

    The :class:`Session` is supplied by the caller (or created here) and is
    the only cookie store: the underlying ``requests`` jar is emptied after
    every exchange.  One re-entrant lock serialises every call, including
    the whole login/logout flow run by the SessionManager.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        session: Session | None = None,
        *,
        http: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        retries: int = TRANSPORT_RETRIES,
        backoff: float = RETRY_BACKOFF,
        quiescence: QuiescencePolicy | None = None,
        verify_ssl: bool = True,
        sleep=time.sleep,
    ) -> None:
        self.host = host
        self.session = session if session is not None else Session()
        self.http = http if http is not None else build_session(verify_ssl)
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self.quiescence = quiescence if quiescence is not None else QuiescencePolicy()
        self.lock = threading.RLock()
        self._sleep = sleep
        self._tokens = TokenProvider(self._fetch)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, command: str, extra_params=None, multi: bool = False) -> ParsedResponse:
        """
        Read one command, or several comma-joined ones (pass ``multi=True``
        when batching).  No CSRF token is involved.
        """
        return self.dispatch(Command.get(command, extra_params, multi)).response

    def post(self, command: str, extra_params=None, reboots: bool = False,
             succeeded=None) -> ParsedResponse:
        """
        Execute a ``goformId`` command.

        Set *reboots* for commands that restart the router: they are never
        retried, and a reply that *succeeded* accepts (any parsed reply when
        it is None) opens the quiescent window.
        """
        return self.dispatch(Command.post(command, extra_params), reboots=reboots,
                             succeeded=succeeded).response

    def dispatch(self, command: Command, *, reboots: bool = False,
                 succeeded=None, require_session: bool = True) -> Reply:
        """
        Send *command* with bounded retry on transport errors.

        *require_session* is cleared only by the login/logout flow, which
        must run while the session awaits re-authentication.
        """
        reserved = _RESERVED_GET_FIELDS if command.method is Method.GET else _RESERVED_POST_FIELDS
        _check_reserved(command, reserved)
        with self.lock:
            self.quiescence.check(self.session)
            if require_session and self.session.state is SessionState.REAUTH_REQUIRED:
                raise ReauthenticationRequiredError(
                    f"session invalidated by reboot; login() before sending {command.name}"
                )

            attempts = 1 if reboots else self.retries + 1
            attempt = 0
            while True:
                try:
                    reply = self._attempt(command)
                    break
                except TransportError as exc:
                    attempt += 1
                    if attempt >= attempts:
                        raise
                    delay = self.backoff * (2 ** (attempt - 1))
                    log.warning("[RETRY] %s failed (%s); retry %d/%d in %.1fs",
                                command.name, exc, attempt, attempts - 1, delay)
                    self._sleep(delay)

            # A rejected command did not reboot anything
            if reboots and (succeeded is None or succeeded(reply.response)):
                self.quiescence.begin()
            return reply

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _attempt(self, command: Command) -> Reply:
        if command.method is Method.GET:
            return self._send_get(command)
        # Token fetch and POST form one unit; a retry fetches a new token
        token = self._tokens.next_token()
        return self._send_post(command, token)

    def _fetch(self, name: str) -> ParsedResponse:
        return self._send_get(Command.get(name)).response

    def _send_get(self, command: Command) -> Reply:
        params = [("cmd", command.name), ("isTest", "false")]
        if command.multi:
            params.append(("multi_data", "1"))
        params.extend(command.params)
        return self._exchange(command, GET_PATH, params=params)

    def _send_post(self, command: Command, token: str) -> Reply:
        data = [("goformId", command.name), ("isTest", "false")]
        # An empty token means "no session": the field is left out entirely
        if token:
            data.append(("CSRFToken", token))
        data.extend(command.params)
        return self._exchange(command, POST_PATH, data=data)

    def _exchange(self, command: Command, path: str, params=None, data=None) -> Reply:
        url = base_url(self.host) + path
        headers = {
            "User-Agent": USER_AGENT,
            "Referer": base_url(self.host) + "/",
        }
        cookies = {COOKIE_NAME: self.session.cookie} if self.session.cookie else None
        try:
            if command.method is Method.GET:
                resp = self.http.get(url, params=params, headers=headers,
                                     cookies=cookies, timeout=self.timeout)
            else:
                resp = self.http.post(url, data=data, headers=headers,
                                      cookies=cookies, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"{command.method.value} {command.name}: {exc}") from exc
        finally:
            self.http.cookies.clear()

        log.debug("%s %s -> HTTP %s: %r", command.method.value, command.name,
                  resp.status_code, resp.content[:200])
        return Reply(parse_response(resp.content), _issued_cookie(resp))


def _issued_cookie(resp) -> str | None:
    # The router may set the cookie for several paths; the first one wins
    for cookie in resp.cookies:
        if cookie.name == COOKIE_NAME:
            return cookie.value
    return None


def _check_reserved(command: Command, reserved: frozenset) -> None:
    clashing = sorted({name for name, _ in command.params} & reserved)
    if clashing:
        raise ValueError(f"{command.name}: parameters {clashing} are set by the client")
