"""Tests for the loading status stream."""

import asyncio
import logging

from confmesh.events import LoadEventStream
from confmesh.interfaces import LoadingContext, LoadingStatus

LOADING = LoadingContext(LoadingStatus.LOADING)
LOADED = LoadingContext(LoadingStatus.LOADED)


class TestSubscribe:
    """Tests for callback subscriptions."""

    def test_replays_current_on_subscribe(self):
        stream = LoadEventStream()
        seen = []

        stream.subscribe(seen.append)

        assert seen == [LoadingContext(LoadingStatus.UNSET)]

    def test_receives_emitted_contexts(self):
        stream = LoadEventStream()
        seen = []
        stream.subscribe(seen.append)

        stream.emit(LOADING)
        stream.emit(LOADED)

        assert seen[1:] == [LOADING, LOADED]
        assert stream.current == LOADED

    def test_unsubscribe_stops_delivery(self):
        stream = LoadEventStream()
        seen = []
        subscription = stream.subscribe(seen.append)

        subscription.unsubscribe()
        stream.emit(LOADING)

        assert subscription.closed
        assert len(seen) == 1

    def test_unsubscribe_twice_is_safe(self):
        stream = LoadEventStream()
        subscription = stream.subscribe(lambda ctx: None)

        subscription.unsubscribe()
        subscription.unsubscribe()

        assert subscription.closed

    def test_failing_listener_is_logged_and_isolated(self, caplog):
        stream = LoadEventStream()
        seen = []

        def broken(ctx):
            if ctx.status == LoadingStatus.LOADING:
                raise RuntimeError("listener bug")

        stream.subscribe(broken)
        stream.subscribe(seen.append)

        with caplog.at_level(logging.ERROR, logger="confmesh.events"):
            stream.emit(LOADING)

        assert seen[-1] == LOADING
        assert any("listener failed" in r.getMessage() for r in caplog.records)


class TestListen:
    """Tests for async iteration."""

    async def test_listen_yields_current_then_transitions(self):
        stream = LoadEventStream()
        seen = []

        async def consume():
            async for ctx in stream.listen():
                seen.append(ctx)
                if len(seen) == 3:
                    break

        consumer = asyncio.create_task(consume())
        await asyncio.sleep(0)
        stream.emit(LOADING)
        stream.emit(LOADED)
        await asyncio.wait_for(consumer, timeout=1)

        assert seen == [LoadingContext(), LOADING, LOADED]
