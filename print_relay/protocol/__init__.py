# Print Relay Protocol
# JSON message envelope shared by agent and saas clients

from print_relay.protocol.envelope import (
    MessageType,
    PrintOrder,
    InboundMessage,
    OutboundMessage,
    AgentConnectedMessage,
    WelcomeMessage,
    PrintOrderMessage,
    PrintResultMessage,
    PingMessage,
    create_agent_connected,
    create_welcome,
    create_print_order,
    create_print_result,
    create_ping,
)

__all__ = [
    "MessageType",
    "PrintOrder",
    "InboundMessage",
    "OutboundMessage",
    "AgentConnectedMessage",
    "WelcomeMessage",
    "PrintOrderMessage",
    "PrintResultMessage",
    "PingMessage",
    "create_agent_connected",
    "create_welcome",
    "create_print_order",
    "create_print_result",
    "create_ping",
]
