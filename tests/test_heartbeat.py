"""Unit tests for HeartbeatMonitor."""

import asyncio

import pytest

from print_relay.heartbeat import HeartbeatMonitor

from tests.conftest import FakeConnection

INTERVAL = 0.02


@pytest.mark.asyncio
class TestHeartbeatMonitor:

    async def test_pings_while_open(self):
        connection = FakeConnection()
        monitor = HeartbeatMonitor(connection, INTERVAL)

        monitor.start()
        await asyncio.sleep(INTERVAL * 5.5)
        await monitor.stop()

        assert len(connection.sent) >= 3
        assert all(frame == {"type": "ping"} for frame in connection.sent)

    async def test_no_pings_after_stop(self):
        connection = FakeConnection()
        monitor = HeartbeatMonitor(connection, INTERVAL)

        monitor.start()
        await asyncio.sleep(INTERVAL * 2.5)
        await monitor.stop()
        sent_at_stop = len(connection.sent)
        await asyncio.sleep(INTERVAL * 4)

        assert len(connection.sent) == sent_at_stop
        assert not monitor.is_running

    async def test_skips_closed_connection(self):
        connection = FakeConnection(is_open=False)
        monitor = HeartbeatMonitor(connection, INTERVAL)

        monitor.start()
        await asyncio.sleep(INTERVAL * 4)
        await monitor.stop()

        assert connection.sent == []
        assert monitor.pings_sent == 0

    async def test_send_failure_does_not_stop_timer(self):
        connection = FakeConnection(fail_on_send=True)
        monitor = HeartbeatMonitor(connection, INTERVAL)

        monitor.start()
        await asyncio.sleep(INTERVAL * 3)

        assert monitor.is_running
        await monitor.stop()

    async def test_stop_is_idempotent(self):
        monitor = HeartbeatMonitor(FakeConnection(), INTERVAL)

        monitor.start()
        await monitor.stop()
        await monitor.stop()

        assert not monitor.is_running

    async def test_stop_before_start(self):
        monitor = HeartbeatMonitor(FakeConnection(), INTERVAL)

        await monitor.stop()

        assert not monitor.is_running


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        HeartbeatMonitor(FakeConnection(), 0)
