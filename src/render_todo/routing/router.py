# src/render_todo/routing/router.py

"""
Byte-level path router for render().

Patterns are compiled once into a list of segment matchers:

    /about            literal segments
    /task/{id:u32}    variable segment (":u32" restricts it to a decimal u32)
    /json/*           trailing wildcard, binds the raw remainder

Paths are opaque byte strings, so matching never decodes them.
Routes are tried in registration order; the first match wins and anything
unmatched goes to the default handler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import U32_MAX

logger = logging.getLogger(__name__)

RouteHandler = Callable[[Any, "RouteMatch"], bytes]

_SLASH = b"/"
_U32_DIGITS = 10


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    value: bytes


@dataclass(frozen=True, slots=True)
class VarSegment:
    name: str
    u32: bool = False


Segment = LiteralSegment | VarSegment


def parse_u32(raw: bytes) -> int | None:
    """ASCII decimal to u32; None for anything else (signs, spaces, overflow)."""
    if not raw or len(raw) > _U32_DIGITS:
        return None
    n = 0
    for b in raw:
        if b < 0x30 or b > 0x39:
            return None
        n = n * 10 + (b - 0x30)
    return n if n <= U32_MAX else None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    source: str
    segments: tuple[Segment, ...]
    wildcard: bool

    @classmethod
    def compile(cls, pattern: str) -> CompiledPattern:
        if not pattern.startswith("/"):
            raise ValueError(f"route pattern must start with '/': {pattern!r}")

        parts = pattern[1:].split("/")
        wildcard = parts[-1] == "*"
        if wildcard:
            parts = parts[:-1]
            if not parts:
                raise ValueError("a bare '/*' pattern is not supported; use the default handler")

        segments: list[Segment] = []
        for part in parts:
            if "*" in part:
                raise ValueError(f"'*' is only allowed as the last segment: {pattern!r}")
            if part.startswith("{") and part.endswith("}"):
                name, _, kind = part[1:-1].partition(":")
                if not name or kind not in ("", "u32"):
                    raise ValueError(f"bad variable segment {part!r} in {pattern!r}")
                segments.append(VarSegment(name=name, u32=kind == "u32"))
            else:
                segments.append(LiteralSegment(part.encode("ascii")))

        return cls(source=pattern, segments=tuple(segments), wildcard=wildcard)

    def match(self, path: bytes) -> tuple[dict[str, bytes], bytes | None] | None:
        """Return (params, remainder) or None. remainder is None for non-wildcard patterns."""
        params: dict[str, bytes] = {}
        pos = 0
        n = len(path)

        for seg in self.segments:
            if path[pos : pos + 1] != _SLASH:
                return None
            pos += 1
            end = path.find(_SLASH, pos)
            if end < 0:
                end = n
            chunk = path[pos:end]

            if isinstance(seg, LiteralSegment):
                if chunk != seg.value:
                    return None
            else:
                if not chunk:
                    return None
                if seg.u32 and parse_u32(chunk) is None:
                    return None
                params[seg.name] = chunk
            pos = end

        if self.wildcard:
            if path[pos : pos + 1] != _SLASH:
                return None
            return params, path[pos + 1 :]

        if pos != n:
            return None
        return params, None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """What a handler sees: the route that matched and what it captured."""

    path: bytes
    route: str | None
    params: dict[str, bytes] = field(default_factory=dict)
    remainder: bytes | None = None

    @property
    def is_default(self) -> bool:
        return self.route is None

    def get(self, name: str) -> bytes | None:
        return self.params.get(name)

    def get_u32(self, name: str) -> int | None:
        raw = self.params.get(name)
        return None if raw is None else parse_u32(raw)


@dataclass(slots=True)
class Route:
    name: str
    pattern: CompiledPattern
    handler: RouteHandler


def to_path_bytes(path: str | bytes | None) -> bytes:
    """
    Absent path means '/'. Text paths are UTF-8 encoded.

    Lone surrogates (e.g. undecodable console bytes) are passed through as-is;
    the result can only fall through to the default handler or a capture.
    """
    if path is None:
        return b"/"
    if isinstance(path, str):
        return path.encode("utf-8", "surrogatepass")
    return bytes(path)


class Router:
    """Ordered route table with a default handler."""

    def __init__(self, default: RouteHandler) -> None:
        self._routes: list[Route] = []
        self._default = default

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    def register(self, pattern: str, handler: RouteHandler, name: str | None = None) -> None:
        compiled = CompiledPattern.compile(pattern)
        self._routes.append(Route(name=name or pattern, pattern=compiled, handler=handler))

    def match(self, path: str | bytes | None) -> tuple[RouteHandler, RouteMatch]:
        raw = to_path_bytes(path)
        for route in self._routes:
            found = route.pattern.match(raw)
            if found is None:
                continue
            params, remainder = found
            return route.handler, RouteMatch(
                path=raw, route=route.name, params=params, remainder=remainder
            )
        return self._default, RouteMatch(path=raw, route=None)

    def handle(self, path: str | bytes | None, request: Any) -> bytes:
        handler, m = self.match(path)
        logger.debug("Route path=%r -> %s", m.path, m.route or "<default>")
        return handler(request, m)
