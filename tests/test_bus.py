import asyncio
import logging

from sticky_notes.bus import RefreshBus


def test_publish_without_subscribers_is_harmless() -> None:
    async def scenario():
        bus = RefreshBus()
        bus.start()
        bus.publish()
        bus.publish()
        await bus.wait_idle()
        await bus.close()

    asyncio.run(scenario())


def test_each_event_reaches_each_handler_once() -> None:
    async def scenario():
        bus = RefreshBus()
        bus.start()
        calls = []
        bus.subscribe(lambda: calls.append("a"))
        bus.subscribe(lambda: calls.append("b"))
        bus.publish()
        bus.publish()
        await bus.wait_idle()
        await bus.close()
        return calls

    assert asyncio.run(scenario()) == ["a", "b", "a", "b"]


def test_async_handlers_never_overlap() -> None:
    async def scenario():
        bus = RefreshBus()
        bus.start()
        running = 0
        peak = 0
        log = []

        async def handler():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            log.append("start")
            await asyncio.sleep(0.01)
            log.append("end")
            running -= 1

        bus.subscribe(handler)
        for _ in range(3):
            bus.publish()
        await bus.wait_idle()
        await bus.close()
        return peak, log

    peak, log = asyncio.run(scenario())
    assert peak == 1
    assert log == ["start", "end"] * 3


def test_events_published_before_start_are_delivered() -> None:
    async def scenario():
        bus = RefreshBus()
        calls = []
        bus.subscribe(lambda: calls.append(1))
        bus.publish()
        bus.start()
        await bus.wait_idle()
        await bus.close()
        return calls

    assert asyncio.run(scenario()) == [1]


def test_unsubscribed_handler_is_not_called() -> None:
    async def scenario():
        bus = RefreshBus()
        bus.start()
        calls = []
        subscription = bus.subscribe(lambda: calls.append(1))
        subscription.unsubscribe()
        subscription.unsubscribe()
        bus.publish()
        await bus.wait_idle()
        await bus.close()
        return calls, bus.subscriber_count

    assert asyncio.run(scenario()) == ([], 0)


def test_failing_handler_does_not_stop_dispatch(caplog) -> None:
    async def scenario():
        bus = RefreshBus()
        bus.start()
        calls = []

        def broken():
            raise RuntimeError("boom")

        bus.subscribe(broken)
        bus.subscribe(lambda: calls.append(1))
        bus.publish()
        bus.publish()
        await bus.wait_idle()
        await bus.close()
        return calls

    with caplog.at_level(logging.ERROR, logger="sticky_notes.bus"):
        assert asyncio.run(scenario()) == [1, 1]
    assert "boom" in caplog.text


def test_publish_after_close_is_dropped() -> None:
    async def scenario():
        bus = RefreshBus()
        bus.start()
        await bus.close()
        bus.publish()

    asyncio.run(scenario())
