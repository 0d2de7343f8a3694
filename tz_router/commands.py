"""
Command model and the router commands this package knows about.

Command payloads such as band-lock bit patterns are caller configuration;
this module only knows their field names and success signals.
"""

import math
from dataclasses import dataclass
from enum import Enum

from .errors import CommandFailureError
from .logging_setup import log

# ---------------------------------------------------------------------------
# Known command names
# ---------------------------------------------------------------------------
GET_RANDOM_LOGIN = "GET_RANDOM_LOGIN"
LOGIN            = "LOGIN"
LOGOUT           = "LOGOUT"
GET_TOKEN        = "get_token"
SET_LOCK_BAND    = "TZ_SET_LOCK_BAND"

# Readable without a session; batched into one multi_data request
STATUS_COMMANDS = ("system_status", "web_signal", "network_type", "ppp_status")


class Method(Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class Command:
    """One request to the router, built per call and dropped after the reply."""

    name: str
    method: Method
    params: tuple[tuple[str, str], ...] = ()
    multi: bool = False

    @classmethod
    def get(cls, name: str, params=None, multi: bool = False) -> "Command":
        return cls(name, Method.GET, _freeze(params), multi)

    @classmethod
    def post(cls, name: str, params=None) -> "Command":
        return cls(name, Method.POST, _freeze(params))


def _freeze(params) -> tuple[tuple[str, str], ...]:
    if not params:
        return ()
    items = params.items() if hasattr(params, "items") else params
    return tuple((str(k), str(v)) for k, v in items)


def result_code(response) -> int | float | None:
    """
    Return the first ``result`` value as a number, or None when absent or
    not a finite number.  Integral values (``"0"``, ``1.0``) come back as int.
    """
    value = response.first_value("result")
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


# ---------------------------------------------------------------------------
# Band locking
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BandLock:
    """
    Field values for ``TZ_SET_LOCK_BAND``.

    The values are opaque strings taken from configuration, for example
    ``band_list="69,0,0,0,160,0,0,0"``.  Optional fields left as ``None``
    are not sent.
    """

    band_state: str
    band_list: str
    wcdma_list: str | None = None
    tds_list: str | None = None
    zeact: str | None = None

    def as_params(self) -> list[tuple[str, str]]:
        fields = (
            ("band_state", self.band_state),
            ("band_list", self.band_list),
            ("wcdma_list", self.wcdma_list),
            ("tds_list", self.tds_list),
            ("zeact", self.zeact),
        )
        return [(name, value) for name, value in fields if value is not None]


def lock_band(client, band_lock: BandLock, reboots: bool = True):
    """
    Apply *band_lock*.  Success iff the first ``result`` is 0.

    Band changes are flagged reboot-inducing unless *reboots* is False.
    Returns the parsed reply; raises :class:`CommandFailureError` otherwise.
    """
    response = client.post(SET_LOCK_BAND, band_lock.as_params(), reboots=reboots,
                           succeeded=_band_lock_succeeded)
    if not _band_lock_succeeded(response):
        raise CommandFailureError(SET_LOCK_BAND, response)
    log.info("Band lock applied: band_state=%s band_list=%s",
             band_lock.band_state, band_lock.band_list)
    return response


def _band_lock_succeeded(response) -> bool:
    # first occurrence of "result"
    return result_code(response) == 0


def read_status(client, commands=STATUS_COMMANDS) -> dict:
    """Batch-read status fields in one request; first occurrence of each key wins."""
    response = client.get(",".join(commands), multi=True)
    return response.to_dict("first")
