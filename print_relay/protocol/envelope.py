"""
Print Relay Message Envelope

Every frame exchanged with the relay is a JSON object with a ``type``
discriminator. Field names on the wire are camelCase (``printId``,
``restaurantId``) because that is what the saas and agent clients speak;
the models below expose snake_case attributes and serialize by alias.

Why pydantic models instead of raw dicts?
- Inbound frames are validated in one place (malformed -> ValidationError)
- Outbound frames always have the same shape
- Unknown order fields survive untouched (orders are opaque to the relay)
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator


class MessageType(str, Enum):
    """
    Relay message types.

    Inbound (client -> relay):
    - print_order: saas asks the relay to forward an order to a tenant's agent
    - pong: keep-alive answer, accepted and ignored

    Outbound (relay -> client):
    - agent_connected: agent registration confirmed
    - welcome: saas connection accepted
    - print_order: order forwarded to the agent
    - print_ack / print_error: routing outcome sent back to the saas
    - ping: periodic keep-alive
    """
    PRINT_ORDER = "print_order"
    PONG = "pong"

    AGENT_CONNECTED = "agent_connected"
    WELCOME = "welcome"
    PRINT_ACK = "print_ack"
    PRINT_ERROR = "print_error"
    PING = "ping"


class PrintOrder(BaseModel):
    """
    A print job as submitted by the saas.

    Only ``printId`` is read by the relay. The payload the order was parsed
    from is kept and forwarded to the agent as received, so no field (the
    id included) goes through type coercion.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    print_id: Any = Field(
        ...,
        alias="printId",
        description="Client-assigned identifier used to correlate the ack"
    )

    _payload: dict[str, Any] | None = PrivateAttr(default=None)

    @field_validator("print_id")
    @classmethod
    def _require_print_id(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("printId must not be null")
        return value

    @model_validator(mode="wrap")
    @classmethod
    def _keep_payload(cls, data: Any, handler):
        order = handler(data)
        if isinstance(data, dict) and "printId" in data:
            order._payload = dict(data)
        return order

    def to_wire(self) -> dict[str, Any]:
        """Return the order exactly as the agent should receive it."""
        if self._payload is not None:
            return dict(self._payload)
        return self.model_dump(by_alias=True)


class InboundMessage(BaseModel):
    """
    A frame received from a client.

    ``type`` is kept as a plain string so that unknown types can be logged
    rather than rejected at parse time.
    """
    model_config = ConfigDict(extra="allow")

    type: str
    order: dict[str, Any] | None = None


class OutboundMessage(BaseModel):
    """Base for frames sent by the relay."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    type: MessageType

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class AgentConnectedMessage(OutboundMessage):
    type: MessageType = MessageType.AGENT_CONNECTED
    restaurant_id: str = Field(..., alias="restaurantId")


class WelcomeMessage(OutboundMessage):
    type: MessageType = MessageType.WELCOME
    server: str


class PrintOrderMessage(OutboundMessage):
    type: MessageType = MessageType.PRINT_ORDER
    order: dict[str, Any]

    def to_json(self) -> str:
        # Null fields inside the order belong to the payload
        return self.model_dump_json(by_alias=True)


class PrintResultMessage(OutboundMessage):
    """print_ack or print_error, depending on ``success``."""
    print_id: Any = Field(..., alias="printId")
    success: bool
    reason: str | None = None


class PingMessage(OutboundMessage):
    type: MessageType = MessageType.PING


# === Relay message constructors ===

def create_agent_connected(restaurant_id: str) -> AgentConnectedMessage:
    """
    Relay confirmation sent to an agent once it is registered.
    """
    return AgentConnectedMessage(restaurant_id=restaurant_id)


def create_welcome(server: str) -> WelcomeMessage:
    """
    Relay greeting sent to a saas connection after authentication.
    """
    return WelcomeMessage(server=server)


def create_print_order(order: PrintOrder) -> PrintOrderMessage:
    """
    Relay forwards an order to the tenant's agent.

    The order payload is passed through untouched.
    """
    return PrintOrderMessage(order=order.to_wire())


def create_print_result(
    print_id: Any,
    success: bool,
    reason: str | None = None
) -> PrintResultMessage:
    """
    Routing outcome for the saas, correlated by print_id.

    A successful outcome becomes ``print_ack`` and never carries a reason;
    a failed one becomes ``print_error``.
    """
    return PrintResultMessage(
        type=MessageType.PRINT_ACK if success else MessageType.PRINT_ERROR,
        print_id=print_id,
        success=success,
        reason=None if success else reason
    )


def create_ping() -> PingMessage:
    """Keep-alive frame."""
    return PingMessage()
