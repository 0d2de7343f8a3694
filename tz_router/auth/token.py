"""Anti-CSRF token derivation for POST commands."""

from ..commands import GET_TOKEN
from ..logging_setup import log
from .password import sha256_hex


class TokenProvider:
    """
    Produces the ``CSRFToken`` for exactly one upcoming POST.

    *fetch* is a callable that sends a GET command and returns its parsed
    reply.  The router hands out a new random value per call, so nothing is
    cached: every :meth:`next_token` is one fresh round trip.
    """

    def __init__(self, fetch) -> None:
        self._fetch = fetch

    def next_token(self) -> str:
        """
        Return ``sha256(token)`` in hex, or ``""`` when the router sent no
        token.  An empty token means "no session": the caller omits the
        CSRFToken field entirely.
        """
        response = self._fetch(GET_TOKEN)
        # get_token carries a single token; use the first occurrence
        token = response.first_value("token")
        if token is None or token == "":
            log.debug("get_token: no token in reply (unauthenticated)")
            return ""
        return sha256_hex(str(token))
