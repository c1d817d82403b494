#!/usr/bin/env python3
"""
Demo Agent - Local Print Controller

This agent demonstrates the restaurant side of the relay:
1. Connects with role=agent, authenticating with its restaurant id
2. Receives agent_connected once registered
3. Answers every ping with a pong
4. Prints every print_order it receives

Usage:
    python scripts/demo_agent.py [restaurant_id]

Start the relay first:
    WS_SECRET=dev-secret python -m print_relay
"""

import asyncio
import json
import sys

import websockets

RELAY_URL = "ws://localhost:3001"
RESTAURANT_ID = sys.argv[1] if len(sys.argv) > 1 else "resto-1"


async def run_agent():
    url = f"{RELAY_URL}/?token={RESTAURANT_ID}&restaurantId={RESTAURANT_ID}&role=agent"

    print("=" * 70)
    print(f"🖨️  DEMO AGENT for restaurant {RESTAURANT_ID}")
    print("=" * 70)

    try:
        async with websockets.connect(url) as ws:
            async for raw in ws:
                data = json.loads(raw)
                msg_type = data.get("type", "unknown")

                if msg_type == "agent_connected":
                    print(f"✅ Registered with relay as agent for {data['restaurantId']}")
                    print("⏳ Waiting for print orders... (Ctrl+C to quit)")

                elif msg_type == "ping":
                    await ws.send(json.dumps({"type": "pong"}))

                elif msg_type == "print_order":
                    order = data.get("order", {})
                    print("\n" + "─" * 70)
                    print(f"📥 PRINT ORDER {order.get('printId')}")
                    print("─" * 70)
                    for key, value in order.items():
                        print(f"   • {key}: {value}")

                else:
                    print(f"❓ Unexpected message: {data}")

    except websockets.exceptions.ConnectionClosed as e:
        print(f"\n🔌 Connection closed: code={e.code} reason={e.reason!r}")
    except OSError as e:
        print(f"\n❌ Could not reach relay at {RELAY_URL}: {e}")
        print("   Start it with: WS_SECRET=dev-secret python -m print_relay")


if __name__ == "__main__":
    try:
        asyncio.run(run_agent())
    except KeyboardInterrupt:
        print("\n👋 Agent stopped")
