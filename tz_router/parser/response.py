"""
Lenient decoder for router response bodies.

The router answers with JSON-shaped text, but some commands emit objects with
the same key more than once, e.g.::

    {"result":"0","wan_ipaddr":"10.0.0.2","wan_ipaddr":""}

``json.loads`` keeps only the last occurrence of such a key.  Here every
object is decoded into a :class:`ResponseObject`, an ordered multimap that
keeps *all* occurrences in arrival order.  Which occurrence is authoritative
depends on the command, so callers pick explicitly via :meth:`first_value` /
:meth:`last_value` / :meth:`all_values`.
"""

import json

from ..errors import MalformedResponseError


class ResponseObject:
    """Immutable ordered multimap: key -> tuple of values (first-seen key order)."""

    __slots__ = ("_values",)

    def __init__(self, pairs=()) -> None:
        values: dict[str, list] = {}
        for key, value in pairs:
            values.setdefault(key, []).append(value)
        self._values = {key: tuple(vals) for key, vals in values.items()}

    def first_value(self, key: str, default=None):
        vals = self._values.get(key)
        return vals[0] if vals else default

    def last_value(self, key: str, default=None):
        vals = self._values.get(key)
        return vals[-1] if vals else default

    def all_values(self, key: str) -> tuple:
        return self._values.get(key, ())

    def raw_keys(self) -> list[str]:
        return list(self._values)

    def to_dict(self, occurrence: str = "first") -> dict:
        """
        Flatten into a plain ``dict`` for display / JSON output.

        *occurrence* is ``"first"``, ``"last"`` or ``"all"`` (list of every
        value).  Nested objects are flattened with the same rule.
        """
        if occurrence not in ("first", "last", "all"):
            raise ValueError(f"unknown occurrence {occurrence!r}")

        def _flatten(value):
            if isinstance(value, ResponseObject):
                return value.to_dict(occurrence)
            if isinstance(value, list):
                return [_flatten(v) for v in value]
            return value

        out = {}
        for key, vals in self._values.items():
            if occurrence == "first":
                out[key] = _flatten(vals[0])
            elif occurrence == "last":
                out[key] = _flatten(vals[-1])
            else:
                out[key] = [_flatten(v) for v in vals]
        return out

    def __contains__(self, key) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResponseObject):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


class ParsedResponse(ResponseObject):
    """Top-level reply of one HTTP exchange, with the raw body kept for diagnostics."""

    __slots__ = ("raw",)

    def __init__(self, pairs=(), raw: str = "") -> None:
        super().__init__(pairs)
        self.raw = raw

    @classmethod
    def from_object(cls, obj: ResponseObject, raw: str) -> "ParsedResponse":
        parsed = cls(raw=raw)
        parsed._values = obj._values
        return parsed


def parse_response(body: str | bytes) -> ParsedResponse:
    """
    Decode a router reply into a :class:`ParsedResponse`.

    Tolerated: duplicate keys, a UTF-8 BOM, surrounding whitespace and raw
    control characters inside strings.  Raises
    :class:`MalformedResponseError` for empty or truncated bodies, non-JSON
    content, and JSON whose top level is not an object.
    """
    raw = body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    text = body.lstrip("\ufeff").strip()
    if not text:
        raise MalformedResponseError("empty response body", raw)

    try:
        obj = json.loads(text, object_pairs_hook=ResponseObject, strict=False)
    except ValueError as exc:
        raise MalformedResponseError(f"undecodable response body: {exc}", raw) from exc

    if not isinstance(obj, ResponseObject):
        raise MalformedResponseError(
            f"expected a JSON object, got {type(obj).__name__}", raw
        )
    return ParsedResponse.from_object(obj, body)
