import asyncio

import pytest

from site_prompt_builder.errors import StreamStateError
from site_prompt_builder.models.session import StreamSession, StreamStatus
from site_prompt_builder.streaming import StreamAggregator


async def fragments_from(items, *, error=None):
    for item in items:
        await asyncio.sleep(0)
        yield item
    if error is not None:
        raise error


async def snapshots_of(source, session=None):
    return [snapshot async for snapshot in StreamAggregator().stream(source, session=session)]


def test_snapshots_grow_with_each_fragment():
    session = StreamSession()
    snapshots = asyncio.run(snapshots_of(fragments_from(["Ola", ", ", "mundo"]), session))

    assert snapshots == ["Ola", "Ola, ", "Ola, mundo"]
    assert session.status is StreamStatus.completed
    assert session.accumulated == "Ola, mundo"
    assert session.fragments == 3
    assert session.error is None


def test_empty_source_completes_without_snapshots():
    session = StreamSession()
    snapshots = asyncio.run(snapshots_of(fragments_from([]), session))

    assert snapshots == []
    assert session.status is StreamStatus.completed
    assert session.accumulated == ""


def test_failure_becomes_final_diagnostic_snapshot():
    session = StreamSession()
    source = fragments_from(["Parte1"], error=RuntimeError("cota excedida"))
    snapshots = asyncio.run(snapshots_of(source, session))

    assert snapshots[0] == "Parte1"
    assert len(snapshots) == 2
    assert snapshots[1].startswith("Parte1")
    assert "Ocorreu um erro na comunicação com a API: cota excedida" in snapshots[1]
    assert session.status is StreamStatus.failed
    assert session.error == "Ocorreu um erro na comunicação com a API: cota excedida"


def test_failure_without_message_uses_fallback():
    snapshots = asyncio.run(snapshots_of(fragments_from([], error=RuntimeError())))

    assert snapshots == ["Ocorreu um erro desconhecido ao gerar o prompt."]


def test_collect_returns_terminal_session():
    session = asyncio.run(StreamAggregator().collect(fragments_from(["a", "b"])))

    assert session.status is StreamStatus.completed
    assert session.accumulated == "ab"


def test_closing_early_cancels_session_and_source():
    closed = []

    async def source():
        try:
            for item in ["um", "dois", "três"]:
                yield item
        finally:
            closed.append(True)

    async def consume_first(session):
        stream = StreamAggregator().stream(source(), session=session)
        first = await stream.__anext__()
        await stream.aclose()
        return first

    session = StreamSession()
    first = asyncio.run(consume_first(session))

    assert first == "um"
    assert session.status is StreamStatus.cancelled
    assert session.accumulated == "um"
    assert closed == [True]


def test_concurrent_sessions_do_not_share_state():
    aggregator = StreamAggregator()

    async def run_both():
        left = StreamSession()
        right = StreamSession()
        results = await asyncio.gather(
            _drain(aggregator, fragments_from(["a", "b", "c"]), left),
            _drain(aggregator, fragments_from(["x", "y"]), right),
        )
        return results, left, right

    (left_snaps, right_snaps), left, right = asyncio.run(run_both())

    assert left_snaps == ["a", "ab", "abc"]
    assert right_snaps == ["x", "xy"]
    assert left.accumulated == "abc"
    assert right.accumulated == "xy"


async def _drain(aggregator, source, session):
    return [snapshot async for snapshot in aggregator.stream(source, session=session)]


def test_terminal_session_rejects_transitions():
    session = StreamSession()
    session.append("x")
    session.complete()

    with pytest.raises(StreamStateError):
        session.append("y")
    with pytest.raises(StreamStateError):
        session.fail("boom")
    assert session.accumulated == "x"
