"""Exception types raised by the router client."""


class RouterError(Exception):
    """Base class for every error raised by this package."""


class TransportError(RouterError):
    """Connection, DNS or timeout failure talking to the router."""


class MalformedResponseError(RouterError):
    """The response body could not be decoded, even leniently.

    The real-world effect of the command that produced it is unknown.
    """

    def __init__(self, message: str, raw: str | bytes = "") -> None:
        super().__init__(message)
        self.raw = raw


class AuthFailureError(RouterError):
    """Login was rejected by the router."""


class SaltMissingError(AuthFailureError):
    """GET_RANDOM_LOGIN reply did not carry a ``random_login`` salt."""


class CommandFailureError(RouterError):
    """A well-formed reply reported that the command did not take effect."""

    def __init__(self, command: str, response, message: str | None = None) -> None:
        super().__init__(message or f"{command} failed: {response.raw!r}")
        self.command = command
        self.response = response


class QuiescenceActiveError(RouterError):
    """A reboot-inducing command was sent recently; the router is still down."""

    def __init__(self, remaining: float) -> None:
        super().__init__(
            f"router is rebooting, requests suspended for another {remaining:.1f}s"
        )
        self.remaining = remaining


class ReauthenticationRequiredError(RouterError):
    """The session was invalidated by a reboot; call login() again."""
