"""Result types returned by the upstream client.

A relay attempt ends in exactly one of these. Routes dispatch on the type,
never on exception names or message text.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UpstreamResponse:
    """The upstream answered and its body was read in full (any status)."""

    status_code: int
    content: bytes
    content_type: str = "application/json"

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class UpstreamTimeout:
    """The upstream did not answer within the configured bound."""

    timeout_seconds: float
    message: str = "Anthropic API timeout - request took too long"


@dataclass(frozen=True)
class UpstreamNetworkFailure:
    """The request never produced a response (DNS, connect, protocol error)."""

    message: str


@dataclass(frozen=True)
class UpstreamUnreadable:
    """The upstream sent a status line but its body could not be read."""

    status_code: int
    message: str = "Upstream response could not be read"


UpstreamResult = UpstreamResponse | UpstreamTimeout | UpstreamNetworkFailure | UpstreamUnreadable
