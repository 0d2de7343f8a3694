"""Configuration constants for the router admin-panel client."""

import os

DEFAULT_HOST = os.environ.get("ROUTER_HOST", "192.168.0.1")
# The password can also be supplied via the ROUTER_PASSWORD env var
DEFAULT_PASSWORD = os.environ.get("ROUTER_PASSWORD", "")

GET_PATH  = "/reqproc/proc_get"
POST_PATH = "/reqproc/proc_post"

# Session cookie handed out by the router on LOGIN
COOKIE_NAME = "random"

# The admin account name is fixed on this firmware; only the password varies
ADMIN_USERNAME = "admin"

# The router aborts requests without a browser-like User-Agent
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

REQUEST_TIMEOUT   = float(os.environ.get("ROUTER_TIMEOUT", "15"))   # seconds per HTTP request
TRANSPORT_RETRIES = 2      # extra attempts after a transport failure
RETRY_BACKOFF     = 0.5    # base seconds, doubled on each retry

# Measured reboot time of the device plus a safety margin
REBOOT_QUIESCE_SECONDS = float(os.environ.get("ROUTER_REBOOT_QUIESCE", "120"))
