"""
Agent Registry

In-memory map from tenant id to that tenant's single active agent.

Rules:
- At most one agent per tenant; registering again replaces the record
- A replaced connection is not closed here, its own lifecycle does that
- unregister is compare-and-swap: a late close event from a superseded
  connection must not evict the connection that replaced it

Why in-memory?
- Agents hold a live socket to this process, so the registry cannot
  outlive it anyway
- Low latency for routing decisions
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from print_relay.registry.agent import AgentRecord

if TYPE_CHECKING:
    from print_relay.transport.connection import Connection

logger = logging.getLogger(__name__)


class AgentRegistry:
    """
    Tracks the active agent connection of each tenant.

    Safe for concurrent use from many connection tasks using an asyncio
    lock. No I/O happens while the lock is held.
    """

    def __init__(self):
        # tenant_id -> AgentRecord
        self._agents: dict[str, AgentRecord] = {}
        self._lock = asyncio.Lock()

    async def register(self, tenant_id: str, connection: "Connection") -> AgentRecord:
        """
        Register (or replace) the agent of a tenant.

        Args:
            tenant_id: Tenant the agent belongs to
            connection: The agent's connection

        Returns:
            The new AgentRecord
        """
        record = AgentRecord(tenant_id=tenant_id, connection=connection)

        async with self._lock:
            previous = self._agents.get(tenant_id)
            self._agents[tenant_id] = record

        if previous is not None and previous.connection is not connection:
            logger.info(
                f"Agent for {tenant_id} replaced: "
                f"{previous.connection!r} -> {connection!r}"
            )
        else:
            logger.info(f"Agent registered for {tenant_id}: {connection!r}")

        return record

    async def lookup(self, tenant_id: str) -> "Connection | None":
        """Get the agent connection of a tenant, if any."""
        async with self._lock:
            record = self._agents.get(tenant_id)
            return record.connection if record else None

    async def get_record(self, tenant_id: str) -> AgentRecord | None:
        """Get the full agent record of a tenant."""
        async with self._lock:
            return self._agents.get(tenant_id)

    async def unregister(self, tenant_id: str, connection: "Connection") -> bool:
        """
        Remove a tenant's agent if it is still the given connection.

        Args:
            tenant_id: Tenant of the closing agent
            connection: The connection that is closing

        Returns:
            True if a record was removed, False if the tenant has no agent or
            a newer connection has taken its place
        """
        async with self._lock:
            record = self._agents.get(tenant_id)
            if record is None or record.connection is not connection:
                return False
            del self._agents[tenant_id]

        logger.info(f"Agent unregistered for {tenant_id}: {connection!r}")
        return True

    async def tenants(self) -> list[str]:
        """Tenants that currently have an agent."""
        async with self._lock:
            return list(self._agents)

    async def clear(self) -> None:
        """Drop every record (used on shutdown)."""
        async with self._lock:
            self._agents.clear()

    @property
    def agent_count(self) -> int:
        """Number of registered agents."""
        return len(self._agents)
