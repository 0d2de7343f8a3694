"""
Command-line interface for the router client.

A thin wrapper meant to be run from cron:

    tz-router status
    tz-router lock-band --band-state 1 --band-list 69,0,0,0,160,0,0,0 --wait
    tz-router get wan_ipaddr,lte_rsrp --multi --login
"""

import argparse
import json
import logging
import sys

from tz_router.commands import BandLock, lock_band, read_status
from tz_router.config import (
    DEFAULT_HOST,
    DEFAULT_PASSWORD,
    REBOOT_QUIESCE_SECONDS,
    REQUEST_TIMEOUT,
)
from tz_router.auth import SessionManager
from tz_router.errors import RouterError
from tz_router.logging_setup import log, setup_logging
from tz_router.network import CommandClient
from tz_router.quiescence import QuiescencePolicy


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Drive the router web admin panel without a browser.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Password can also be provided via the ROUTER_PASSWORD env var.\n"
            "If a command needs a login and no password is available, "
            "you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST,
        help=f"Router IP address (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="Admin password (overrides ROUTER_PASSWORD env var)",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"Seconds per HTTP request (default: {REQUEST_TIMEOUT:g})",
    )
    parser.add_argument(
        "--quiesce", type=float, default=REBOOT_QUIESCE_SECONDS,
        help="Seconds to leave the router alone after a reboot-inducing "
             f"command (default: {REBOOT_QUIESCE_SECONDS:g})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (https hosts only)",
    )
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")

    sub = parser.add_subparsers(dest="action", required=True)

    sub.add_parser("status", help="Read system/signal/network/PPP status (no login)")

    get_p = sub.add_parser("get", help="Read arbitrary command(s)")
    get_p.add_argument("cmd", help="Command name, or several joined by commas")
    get_p.add_argument("params", nargs="*", metavar="KEY=VALUE",
                       help="Extra query parameters")
    get_p.add_argument("--multi", action="store_true",
                       help="Batch read (required for comma-joined commands)")
    get_p.add_argument("--login", action="store_true",
                       help="Log in before reading")

    band_p = sub.add_parser("lock-band", help="Lock the radio to a set of bands")
    band_p.add_argument("--band-state", required=True)
    band_p.add_argument("--band-list", required=True)
    band_p.add_argument("--wcdma-list", default=None)
    band_p.add_argument("--tds-list", default=None)
    band_p.add_argument("--zeact", default=None)
    band_p.add_argument("--no-reboot", dest="reboots", action="store_false", default=True,
                        help="Do not treat the band change as reboot-inducing")
    band_p.add_argument("--wait", action="store_true",
                        help="Block until the router has finished rebooting")

    return parser.parse_args(argv)


def _key_values(items: list[str]) -> list[tuple[str, str]]:
    pairs = []
    for item in items:
        key, sep, value = item.partition("=")
        if not sep:
            raise SystemExit(f"error: expected KEY=VALUE, got {item!r}")
        pairs.append((key, value))
    return pairs


def _password(args: argparse.Namespace) -> str:
    if not args.password:
        import getpass
        args.password = getpass.getpass("Router password: ")
    return args.password


def _emit(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run(args: argparse.Namespace, client: CommandClient) -> None:
    """Execute the parsed sub-command against *client*."""
    if args.action == "status":
        _emit(read_status(client))
        return

    with SessionManager(client) as sm:
        if args.action == "get":
            if args.login:
                sm.login(_password(args))
            response = client.get(args.cmd, _key_values(args.params), multi=args.multi)
            _emit(response.to_dict("all"))

        elif args.action == "lock-band":
            sm.login(_password(args))
            band_lock = BandLock(
                band_state=args.band_state,
                band_list=args.band_list,
                wcdma_list=args.wcdma_list,
                tds_list=args.tds_list,
                zeact=args.zeact,
            )
            response = lock_band(client, band_lock, reboots=args.reboots)
            _emit(response.to_dict("all"))
            if args.reboots and args.wait:
                client.quiescence.wait(client.session)


def main(argv=None) -> None:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    client = CommandClient(
        args.host,
        timeout=args.timeout,
        quiescence=QuiescencePolicy(args.quiesce),
        verify_ssl=args.verify_ssl,
    )
    try:
        run(args, client)
    except RouterError as exc:
        log.error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
