"""
Print Router

Forwards a saas print order to the agent registered for the same tenant.

Routing flow:
1. Look up the tenant's agent in the registry
2. Check the agent connection is still open (a closed connection can
   linger until its lifecycle unregisters it)
3. Enqueue a print_order frame on the agent connection

Exactly one attempt per order. Nothing is retried or queued for later, and
the agent is not asked to acknowledge.
"""

from __future__ import annotations

import logging

from typing import Any

from pydantic import BaseModel

from print_relay.protocol import PrintOrder, create_print_order
from print_relay.registry import AgentRegistry

logger = logging.getLogger(__name__)

REASON_AGENT_OFFLINE = "agent offline"
REASON_DELIVERY_ERROR = "delivery error"


class RoutingOutcome(BaseModel):
    """Result of one forward attempt."""
    print_id: Any
    success: bool
    reason: str | None = None


class PrintRouter:
    """
    Routes print orders to tenant agents.
    """

    def __init__(self, registry: AgentRegistry):
        """
        Initialize the router.

        Args:
            registry: Agent registry for lookups
        """
        self._registry = registry

    async def route(self, tenant_id: str, order: PrintOrder) -> RoutingOutcome:
        """
        Forward an order to the tenant's agent.

        Never raises for routing or delivery problems; they are reported in
        the returned outcome.

        Args:
            tenant_id: Tenant whose agent should print
            order: The order to forward

        Returns:
            RoutingOutcome for the saas
        """
        connection = await self._registry.lookup(tenant_id)

        if connection is None:
            logger.warning(f"No agent online for {tenant_id} (print {order.print_id})")
            return self._failure(order, REASON_AGENT_OFFLINE)

        if not connection.is_open:
            logger.warning(
                f"Agent connection for {tenant_id} is not open (print {order.print_id})"
            )
            return self._failure(order, REASON_AGENT_OFFLINE)

        try:
            connection.send(create_print_order(order))
        except Exception as e:
            logger.error(f"Failed to deliver print {order.print_id} to {tenant_id}: {e}")
            return self._failure(order, REASON_DELIVERY_ERROR)

        logger.info(f"Print {order.print_id} sent to agent {tenant_id}")
        return RoutingOutcome(print_id=order.print_id, success=True)

    @staticmethod
    def _failure(order: PrintOrder, reason: str) -> RoutingOutcome:
        return RoutingOutcome(print_id=order.print_id, success=False, reason=reason)
