"""
tz_router
=========
Unattended client for the router web admin panel's command protocol
(``/reqproc/proc_get`` and ``/reqproc/proc_post``), e.g. for locking radio
bands from cron without a browser.

Package structure
-----------------
tz_router/
├── __init__.py        – package init and public API
├── config.py          – configuration constants (env overrides)
├── logging_setup.py   – colorlog console / file logging
├── errors.py          – exception taxonomy
├── commands.py        – Command model, known commands, band lock / status helpers
├── quiescence.py      – request suspension while the router reboots
├── cli.py             – argparse CLI (``python -m tz_router``)
├── auth/              – Session value, SessionManager, TokenProvider, hashing
├── network/           – requests.Session factory and CommandClient
└── parser/            – duplicate-key tolerant response decoder

Quick start
-----------
    from tz_router import BandLock, CommandClient, SessionManager, lock_band

    client = CommandClient("192.168.0.1")
    with SessionManager(client) as sm:
        sm.login("your_password")
        lock_band(client, BandLock(band_state="1", band_list="69,0,0,0,160,0,0,0"))
"""

from .auth import Session, SessionManager, SessionState, TokenProvider
from .commands import BandLock, Command, Method, lock_band, read_status
from .errors import (
    AuthFailureError,
    CommandFailureError,
    MalformedResponseError,
    QuiescenceActiveError,
    ReauthenticationRequiredError,
    RouterError,
    SaltMissingError,
    TransportError,
)
from .network import CommandClient, build_session
from .parser import ParsedResponse, parse_response
from .quiescence import QuiescencePolicy

__all__ = [
    "AuthFailureError",
    "BandLock",
    "Command",
    "CommandClient",
    "CommandFailureError",
    "MalformedResponseError",
    "Method",
    "ParsedResponse",
    "QuiescenceActiveError",
    "QuiescencePolicy",
    "ReauthenticationRequiredError",
    "RouterError",
    "SaltMissingError",
    "Session",
    "SessionManager",
    "SessionState",
    "TokenProvider",
    "TransportError",
    "build_session",
    "lock_band",
    "parse_response",
    "read_status",
]
