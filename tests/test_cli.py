"""Tests for the command-line wrapper."""

import io
import json
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from router_fakes import FakeClock, FakeRouter

from tz_router.cli import main, parse_args, run
from tz_router.errors import TransportError
from tz_router.network import CommandClient
from tz_router.quiescence import QuiescencePolicy


class TestParseArgs(unittest.TestCase):
    def test_lock_band_args(self):
        args = parse_args([
            "--host", "10.0.0.1", "lock-band",
            "--band-state", "1", "--band-list", "69,0,0,0,160,0,0,0", "--wait",
        ])
        self.assertEqual(args.host, "10.0.0.1")
        self.assertEqual(args.action, "lock-band")
        self.assertEqual(args.band_list, "69,0,0,0,160,0,0,0")
        self.assertIsNone(args.zeact)
        self.assertTrue(args.reboots)
        self.assertTrue(args.wait)

    def test_action_required(self):
        with redirect_stdout(io.StringIO()), patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args([])


class TestRun(unittest.TestCase):
    def setUp(self):
        self.router = FakeRouter()
        self.clock = FakeClock()
        self.client = CommandClient(
            "192.168.0.1", http=self.router.http,
            quiescence=QuiescencePolicy(60, clock=self.clock, sleep=self.clock.sleep),
        )

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            run(parse_args(argv), self.client)
        return out.getvalue()

    def test_status_needs_no_login(self):
        self.router.reply("system_status,web_signal,network_type,ppp_status",
                          {"system_status": "ok", "network_type": "LTE"})
        output = json.loads(self._run(["status"]))
        self.assertEqual(output["network_type"], "LTE")
        self.router.http.post.assert_not_called()

    def test_get_with_params(self):
        self.router.reply("wan_ipaddr", '{"wan_ipaddr":"1.2.3.4","wan_ipaddr":""}')
        output = json.loads(self._run(["get", "wan_ipaddr", "x=1"]))
        self.assertEqual(output, {"wan_ipaddr": ["1.2.3.4", ""]})
        self.assertIn(("x", "1"), self.router.calls[0].fields)

    def test_lock_band_logs_in_and_waits(self):
        self.router.reply("get_token", {})
        self.router.reply("GET_RANDOM_LOGIN", {"random_login": "salt"})
        self.router.reply("LOGIN", {"result": "0"}, cookies={"random": "C"})
        self.router.reply("TZ_SET_LOCK_BAND", {"result": "0"})

        self._run(["--password", "pw", "lock-band", "--band-state", "1",
                   "--band-list", "69,0,0,0,160,0,0,0", "--wait"])

        self.assertEqual(len(self.router.calls_for("TZ_SET_LOCK_BAND")), 1)
        # Rebooting router: no logout attempted, window slept out
        self.assertEqual(self.router.calls_for("LOGOUT"), [])
        self.assertEqual(self.clock.slept, [60])

    def test_get_with_login_logs_out(self):
        self.router.reply("get_token", {})
        self.router.reply("GET_RANDOM_LOGIN", {"random_login": "salt"})
        self.router.reply("LOGIN", {"result": "1"}, cookies={"random": "C"})
        self.router.reply("lte_rsrp", {"lte_rsrp": "-95"})
        self.router.reply("LOGOUT", {"result": "success"})

        self._run(["--password", "pw", "get", "lte_rsrp", "--login"])

        self.assertEqual(self.router.calls_for("lte_rsrp")[0].cookies, {"random": "C"})
        self.assertEqual(len(self.router.calls_for("LOGOUT")), 1)


class TestMain(unittest.TestCase):
    @patch("tz_router.cli.setup_logging")
    @patch("tz_router.cli.run", side_effect=TransportError("unreachable"))
    def test_router_error_exits_non_zero(self, mock_run, mock_logging):
        with self.assertRaises(SystemExit) as ctx:
            main(["status"])
        self.assertEqual(ctx.exception.code, 1)
        mock_run.assert_called_once()


if __name__ == "__main__":
    unittest.main()
