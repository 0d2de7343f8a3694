"""
Network operations: HTTP session setup and command dispatch.
"""

from tz_router.network.client import CommandClient, Reply, base_url, build_session

__all__ = ["CommandClient", "Reply", "base_url", "build_session"]
