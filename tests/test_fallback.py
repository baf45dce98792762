import pytest

from app.core.errors import MalformedExtraction
from app.core.fallback import first_non_empty


@pytest.mark.asyncio
async def test_first_non_empty_result_wins():
    calls = []

    def empty():
        calls.append("empty")
        return []

    def hit():
        calls.append("hit")
        return ["a", "b"]

    def never():
        calls.append("never")
        return ["c"]

    source, result = await first_non_empty([("empty", empty), ("hit", hit), ("never", never)])

    assert (source, result) == ("hit", ["a", "b"])
    assert calls == ["empty", "hit"]


@pytest.mark.asyncio
async def test_failing_strategy_advances_chain():
    def broken():
        raise MalformedExtraction("bad json")

    async def feed():
        return ["from feed"]

    source, result = await first_non_empty([("broken", broken), ("feed", feed)])

    assert source == "feed"
    assert result == ["from feed"]


@pytest.mark.asyncio
async def test_exhausted_chain_returns_empty():
    def broken():
        raise RuntimeError("boom")

    assert await first_non_empty([("broken", broken), ("empty", lambda: [])]) == ("", [])
