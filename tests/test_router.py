"""Unit tests for PrintRouter."""

import pytest

from print_relay.protocol import PrintOrder
from print_relay.registry import AgentRegistry
from print_relay.routing import (
    PrintRouter,
    REASON_AGENT_OFFLINE,
    REASON_DELIVERY_ERROR,
)

from tests.conftest import FakeConnection


def make_order(print_id="p1", **extra) -> PrintOrder:
    return PrintOrder.model_validate({"printId": print_id, **extra})


@pytest.mark.asyncio
class TestPrintRouter:

    async def test_no_agent_is_offline(self, router: PrintRouter):
        outcome = await router.route("resto-1", make_order())

        assert outcome.print_id == "p1"
        assert outcome.success is False
        assert outcome.reason == REASON_AGENT_OFFLINE

    async def test_closed_agent_is_offline(self, registry: AgentRegistry, router: PrintRouter):
        agent = FakeConnection("resto-1", is_open=False)
        await registry.register("resto-1", agent)

        outcome = await router.route("resto-1", make_order())

        assert outcome.success is False
        assert outcome.reason == REASON_AGENT_OFFLINE
        assert agent.sent == []

    async def test_send_failure_is_delivery_error(self, registry: AgentRegistry, router: PrintRouter):
        await registry.register("resto-1", FakeConnection("resto-1", fail_on_send=True))

        outcome = await router.route("resto-1", make_order("p9"))

        assert outcome.print_id == "p9"
        assert outcome.success is False
        assert outcome.reason == REASON_DELIVERY_ERROR

    async def test_success_forwards_order_verbatim(self, registry: AgentRegistry, router: PrintRouter):
        agent = FakeConnection("resto-1")
        await registry.register("resto-1", agent)

        outcome = await router.route(
            "resto-1",
            make_order("p1", table=4, items=[{"name": "Pizza", "qty": 2}])
        )

        assert outcome.success is True
        assert outcome.reason is None
        assert agent.sent == [
            {
                "type": "print_order",
                "order": {"printId": "p1", "table": 4, "items": [{"name": "Pizza", "qty": 2}]},
            }
        ]

    async def test_routes_only_to_own_tenant(self, registry: AgentRegistry, router: PrintRouter):
        other = FakeConnection("resto-2")
        await registry.register("resto-2", other)

        outcome = await router.route("resto-1", make_order())

        assert outcome.reason == REASON_AGENT_OFFLINE
        assert other.sent == []

    async def test_numeric_print_id_is_preserved(self, registry: AgentRegistry, router: PrintRouter):
        agent = FakeConnection("resto-1")
        await registry.register("resto-1", agent)

        outcome = await router.route("resto-1", make_order(1234))

        assert outcome.print_id == 1234
        assert agent.sent[0]["order"] == {"printId": 1234}

    async def test_order_fields_are_not_coerced(self, registry: AgentRegistry, router: PrintRouter):
        agent = FakeConnection("resto-1")
        await registry.register("resto-1", agent)

        outcome = await router.route("resto-1", make_order(True, total=1.0))

        forwarded = agent.sent[0]["order"]
        assert outcome.print_id is True
        assert forwarded["printId"] is True
        assert isinstance(forwarded["total"], float)

    async def test_fractional_print_id_is_echoed(self, registry: AgentRegistry, router: PrintRouter):
        agent = FakeConnection("resto-1")
        await registry.register("resto-1", agent)

        outcome = await router.route("resto-1", make_order(1.5))

        assert outcome.print_id == 1.5
        assert agent.sent[0]["order"] == {"printId": 1.5}

    async def test_no_retry_after_failure(self, registry: AgentRegistry, router: PrintRouter):
        agent = FakeConnection("resto-1", fail_on_send=True)
        await registry.register("resto-1", agent)

        await router.route("resto-1", make_order())
        agent.fail_on_send = False

        # The failed order was not kept anywhere for a later attempt
        assert agent.sent == []
