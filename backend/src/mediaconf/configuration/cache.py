"""Fingerprint cache gate.

A fingerprint is the MD5 of a resource's path concatenated with its
modification time in ticks. It is recomputed on every request; nothing
is stored. When the requester already holds the current fingerprint (or
has seen the resource since it last changed) the response body is never
produced and a 304 is returned instead.

Derived responses with no backing file (default metadata options, the
plugin listing) use a synthetic identity stamped with the process start
time, so their validators stay good for the lifetime of the process.
"""

import hashlib
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from mediaconf.persistence.adapter import TICKS_PER_SECOND, UNIX_EPOCH_TICKS

CACHE_CONTROL = "public, no-cache"


def ticks_from_datetime(value: datetime) -> int:
    delta = value - datetime(1970, 1, 1, tzinfo=UTC)
    return UNIX_EPOCH_TICKS + (
        (delta.days * 86_400 + delta.seconds) * TICKS_PER_SECOND
        + delta.microseconds * 10
    )


def datetime_from_ticks(ticks: int) -> datetime:
    seconds = (ticks - UNIX_EPOCH_TICKS) / TICKS_PER_SECOND
    return datetime.fromtimestamp(seconds, UTC)


@dataclass(frozen=True)
class ResourceIdentity:
    """A persisted (or synthetic) resource and its modification time."""

    path: str
    modified_at_ticks: int

    @property
    def last_modified(self) -> datetime:
        return datetime_from_ticks(self.modified_at_ticks)


def compute_fingerprint(identity: ResourceIdentity) -> str:
    """MD5 hex digest of path + ticks."""
    raw = f"{identity.path}{identity.modified_at_ticks}".encode("utf-8")
    return hashlib.md5(raw, usedforsecurity=False).hexdigest()


@dataclass
class CacheDecision:
    """Outcome of a cache gate evaluation.

    Attributes:
        fingerprint: Current fingerprint of the resource
        not_modified: True if the requester's validator is still good
        body: Produced response body (None when not_modified)
    """

    fingerprint: str
    not_modified: bool
    body: Any = None


def _etag_matches(if_none_match: str, fingerprint: str) -> bool:
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate == "*":
            return True
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate.strip('"') == fingerprint:
            return True
    return False


def _not_modified_since(if_modified_since: str, last_modified: datetime) -> bool:
    try:
        since = parsedate_to_datetime(if_modified_since)
    except (TypeError, ValueError):
        return False
    if since.tzinfo is None:
        since = since.replace(tzinfo=UTC)
    # HTTP dates carry whole seconds only
    return last_modified.replace(microsecond=0) <= since


class FingerprintCacheGate:
    """Short-circuits response generation for unchanged resources."""

    def __init__(self, started_at: datetime | None = None):
        started = started_at or datetime.now(UTC)
        self._started_ticks = ticks_from_datetime(started)

    def synthetic_identity(self, name: str) -> ResourceIdentity:
        """Identity for a derived response with no backing resource."""
        return ResourceIdentity(path=name, modified_at_ticks=self._started_ticks)

    def evaluate(
        self,
        identity: ResourceIdentity,
        producer: Callable[[], Any],
        if_none_match: str | None = None,
        if_modified_since: str | None = None,
    ) -> CacheDecision:
        """Decide whether the requester needs a fresh body.

        If-None-Match takes precedence; If-Modified-Since is only
        consulted when no entity tag was sent. producer is called only
        when a body is needed.
        """
        fingerprint = compute_fingerprint(identity)

        if if_none_match:
            satisfied = _etag_matches(if_none_match, fingerprint)
        elif if_modified_since:
            satisfied = _not_modified_since(if_modified_since, identity.last_modified)
        else:
            satisfied = False

        if satisfied:
            return CacheDecision(fingerprint=fingerprint, not_modified=True)
        return CacheDecision(fingerprint=fingerprint, not_modified=False, body=producer())

    def respond(
        self,
        request: Request,
        identity: ResourceIdentity,
        producer: Callable[[], Any],
    ) -> Response:
        """Build a 200 JSON response or a 304 for identity."""
        decision = self.evaluate(
            identity,
            producer,
            if_none_match=request.headers.get("if-none-match"),
            if_modified_since=request.headers.get("if-modified-since"),
        )
        headers = {
            "ETag": f'"{decision.fingerprint}"',
            "Last-Modified": format_datetime(identity.last_modified, usegmt=True),
            "Cache-Control": CACHE_CONTROL,
        }
        if decision.not_modified:
            return Response(status_code=304, headers=headers)
        return JSONResponse(content=decision.body, headers=headers)
