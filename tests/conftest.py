"""Pytest configuration and shared fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from print_relay.auth import ConnectionRole
from print_relay.config import RelaySettings
from print_relay.protocol import OutboundMessage
from print_relay.registry import AgentRegistry
from print_relay.routing import PrintRouter
from print_relay.transport import create_app
from print_relay.transport.queue import ConnectionClosedError

SECRET = "test-secret"


class FakeConnection:
    """Stand-in for a relay Connection that records what is sent to it."""

    def __init__(
        self,
        tenant_id: str = "resto-1",
        role: ConnectionRole = ConnectionRole.AGENT,
        is_open: bool = True,
        fail_on_send: bool = False,
    ):
        self.tenant_id = tenant_id
        self.role = role
        self.is_open = is_open
        self.fail_on_send = fail_on_send
        self.conn_id = f"{role.value}:{tenant_id}:{id(self):x}"
        self.sent: list[dict] = []
        self.close_calls = 0

    def send(self, message: OutboundMessage) -> None:
        if self.fail_on_send:
            raise ConnectionClosedError(self.conn_id)
        self.sent.append(message.model_dump(mode="json", by_alias=True, exclude_none=True))

    async def close(self) -> bool:
        self.close_calls += 1
        if not self.is_open:
            return False
        self.is_open = False
        return True


def agent_url(tenant_id: str, token: str | None = None) -> str:
    return f"/?token={token or tenant_id}&restaurantId={tenant_id}&role=agent"


def saas_url(tenant_id: str, token: str = SECRET) -> str:
    return f"/?token={token}&restaurantId={tenant_id}&role=saas"


@pytest.fixture
def registry() -> AgentRegistry:
    return AgentRegistry()


@pytest.fixture
def router(registry: AgentRegistry) -> PrintRouter:
    return PrintRouter(registry)


@pytest.fixture
def settings() -> RelaySettings:
    # Long interval so pings never interleave with the frames under test
    return RelaySettings(secret=SECRET, heartbeat_interval=60.0)


@pytest.fixture
def client(settings: RelaySettings) -> Generator[TestClient, None, None]:
    """TestClient with the lifespan running, so all sockets share one loop."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
