"""
Agent Record Model

The registry's view of a tenant's agent: which connection it is on and
since when.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class AgentRecord(BaseModel):
    """
    Represents the registered agent of one tenant.

    The connection is a non-owning reference; closing it is the job of the
    lifecycle controller that accepted it.
    """
    tenant_id: str = Field(
        ...,
        description="Tenant (restaurant) the agent prints for"
    )
    connection: Any = Field(
        ...,
        description="Live connection handle of the agent"
    )
    connected_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the agent registered"
    )
