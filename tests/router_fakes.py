"""Scripted stand-in for the router's HTTP endpoints, shared by the test modules."""

import json
from typing import NamedTuple
from unittest.mock import MagicMock

import requests


def make_response(body, cookies=None, status_code=200):
    resp = MagicMock(spec=requests.Response)
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    resp.content = body.encode("utf-8") if isinstance(body, str) else body
    resp.status_code = status_code
    resp.cookies = requests.cookies.RequestsCookieJar()
    for name, value in (cookies or {}).items():
        resp.cookies.set(name, value)
    return resp


class Call(NamedTuple):
    method: str
    name: str
    url: str
    fields: list
    headers: dict
    cookies: dict | None

    @property
    def field_dict(self) -> dict:
        return dict(self.fields)


class FakeRouter:
    """
    Replies to GET (keyed by ``cmd``) and POST (keyed by ``goformId``).

    Replies queued with :meth:`reply` are consumed in order; the last one
    keeps being served.  An exception instance in the queue is raised.
    """

    def __init__(self):
        self.calls: list[Call] = []
        self._replies: dict[str, list] = {}
        self.http = MagicMock()
        self.http.cookies = requests.cookies.RequestsCookieJar()
        self.http.get.side_effect = self._get
        self.http.post.side_effect = self._post

    def reply(self, name, *bodies, cookies=None):
        queue = self._replies.setdefault(name, [])
        for body in bodies:
            if isinstance(body, Exception):
                queue.append(body)
            else:
                queue.append(make_response(body, cookies=cookies))
        return self

    def calls_for(self, name):
        return [c for c in self.calls if c.name == name]

    def _next(self, name):
        queue = self._replies.get(name)
        if not queue:
            raise AssertionError(f"unexpected command {name!r}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def _get(self, url, params=None, headers=None, cookies=None, timeout=None):
        fields = list(params or [])
        name = dict(fields)["cmd"]
        self.calls.append(Call("GET", name, url, fields, headers or {}, cookies))
        return self._next(name)

    def _post(self, url, data=None, headers=None, cookies=None, timeout=None):
        fields = list(data or [])
        name = dict(fields)["goformId"]
        self.calls.append(Call("POST", name, url, fields, headers or {}, cookies))
        return self._next(name)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now
        self.slept: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.slept.append(seconds)
        self.now += seconds
