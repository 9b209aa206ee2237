"""Tests for linking caller disconnection to the upstream call."""

import asyncio

import pytest

from app.utils.disconnect import call_unless_disconnected


class FakeRequest:
    """Reports a disconnect after ``connected_polls`` checks."""

    def __init__(self, connected_polls: int | None = None) -> None:
        self.connected_polls = connected_polls
        self.polls = 0

    async def is_disconnected(self) -> bool:
        self.polls += 1
        return self.connected_polls is not None and self.polls > self.connected_polls


async def answer(value: str, delay: float = 0.0) -> str:
    await asyncio.sleep(delay)
    return value


@pytest.mark.asyncio
async def test_returns_result_while_connected() -> None:
    result = await call_unless_disconnected(FakeRequest(), answer("ok", 0.02), poll_seconds=0.01)

    assert result == "ok"


@pytest.mark.asyncio
async def test_disconnect_cancels_the_call() -> None:
    cancelled = asyncio.Event()

    async def pending() -> str:
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return "never"

    request = FakeRequest(connected_polls=2)

    result = await call_unless_disconnected(request, pending(), poll_seconds=0.01)

    assert result is None
    assert cancelled.is_set()
    assert request.polls == 3


@pytest.mark.asyncio
async def test_call_exceptions_propagate() -> None:
    async def failing() -> str:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await call_unless_disconnected(FakeRequest(), failing(), poll_seconds=0.01)


@pytest.mark.asyncio
async def test_watcher_is_stopped_after_the_call_finishes() -> None:
    request = FakeRequest()

    await call_unless_disconnected(request, answer("ok"), poll_seconds=0.01)
    polls_after_return = request.polls
    await asyncio.sleep(0.05)

    assert request.polls == polls_after_return
