"""Unit tests for AgentRegistry."""

import asyncio

import pytest

from print_relay.registry import AgentRegistry

from tests.conftest import FakeConnection


@pytest.mark.asyncio
class TestAgentRegistry:

    async def test_register_and_lookup(self, registry: AgentRegistry):
        agent = FakeConnection("resto-1")

        record = await registry.register("resto-1", agent)

        assert record.tenant_id == "resto-1"
        assert record.connection is agent
        assert await registry.lookup("resto-1") is agent
        assert registry.agent_count == 1

    async def test_lookup_unknown_tenant(self, registry: AgentRegistry):
        assert await registry.lookup("nobody") is None
        assert await registry.get_record("nobody") is None

    async def test_second_agent_replaces_first(self, registry: AgentRegistry):
        first = FakeConnection("resto-1")
        second = FakeConnection("resto-1")

        await registry.register("resto-1", first)
        await registry.register("resto-1", second)

        assert await registry.lookup("resto-1") is second
        assert registry.agent_count == 1
        # The registry never closes a replaced connection
        assert first.close_calls == 0

    async def test_tenants_are_independent(self, registry: AgentRegistry):
        a = FakeConnection("resto-a")
        b = FakeConnection("resto-b")

        await registry.register("resto-a", a)
        await registry.register("resto-b", b)

        assert await registry.lookup("resto-a") is a
        assert await registry.lookup("resto-b") is b
        assert sorted(await registry.tenants()) == ["resto-a", "resto-b"]

    async def test_unregister_removes_current_connection(self, registry: AgentRegistry):
        agent = FakeConnection("resto-1")
        await registry.register("resto-1", agent)

        assert await registry.unregister("resto-1", agent) is True
        assert await registry.lookup("resto-1") is None

    async def test_unregister_twice_removes_once(self, registry: AgentRegistry):
        agent = FakeConnection("resto-1")
        await registry.register("resto-1", agent)

        assert await registry.unregister("resto-1", agent) is True
        assert await registry.unregister("resto-1", agent) is False
        assert registry.agent_count == 0

    async def test_stale_unregister_keeps_newer_connection(self, registry: AgentRegistry):
        old = FakeConnection("resto-1")
        new = FakeConnection("resto-1")
        await registry.register("resto-1", old)
        await registry.register("resto-1", new)

        assert await registry.unregister("resto-1", old) is False
        assert await registry.lookup("resto-1") is new

    async def test_unregister_unknown_tenant(self, registry: AgentRegistry):
        assert await registry.unregister("nobody", FakeConnection("nobody")) is False

    async def test_concurrent_registrations_leave_one_agent(self, registry: AgentRegistry):
        agents = [FakeConnection("resto-1") for _ in range(20)]

        await asyncio.gather(*(registry.register("resto-1", a) for a in agents))

        assert registry.agent_count == 1
        assert await registry.lookup("resto-1") in agents

    async def test_clear(self, registry: AgentRegistry):
        await registry.register("resto-1", FakeConnection("resto-1"))

        await registry.clear()

        assert registry.agent_count == 0
