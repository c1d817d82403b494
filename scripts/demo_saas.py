#!/usr/bin/env python3
"""
Demo Saas - Print Job Submitter

This client demonstrates the saas side of the relay:
1. Connects with role=saas using the shared secret
2. Receives welcome
3. Sends a few print_order messages for one restaurant
4. Prints the print_ack / print_error for each

Usage:
    WS_SECRET=dev-secret python scripts/demo_saas.py [restaurant_id]

Run scripts/demo_agent.py first to see successful acks; without an agent
every order comes back as print_error "agent offline".
"""

import asyncio
import json
import os
import sys
from uuid import uuid4

import websockets

RELAY_URL = "ws://localhost:3001"
RESTAURANT_ID = sys.argv[1] if len(sys.argv) > 1 else "resto-1"
SECRET = os.getenv("WS_SECRET", "dev-secret")


async def run_saas():
    url = f"{RELAY_URL}/?token={SECRET}&restaurantId={RESTAURANT_ID}&role=saas"

    async with websockets.connect(url) as ws:
        welcome = json.loads(await ws.recv())
        print(f"✅ Connected: {welcome}")

        for table in (1, 2, 3):
            order = {
                "printId": str(uuid4()),
                "table": table,
                "items": [{"name": "Margherita", "qty": 1}],
            }
            await ws.send(json.dumps({"type": "print_order", "order": order}))
            print(f"📤 Sent print {order['printId']} (table {table})")

            # Skip keep-alive pings until the outcome arrives
            while True:
                data = json.loads(await ws.recv())
                if data.get("type") == "ping":
                    await ws.send(json.dumps({"type": "pong"}))
                    continue
                break

            if data.get("success"):
                print(f"   ✅ {data['type']} for {data['printId']}")
            else:
                print(f"   ❌ {data['type']} for {data['printId']}: {data.get('reason')}")


if __name__ == "__main__":
    try:
        asyncio.run(run_saas())
    except websockets.exceptions.ConnectionClosed as e:
        print(f"🔌 Connection closed: code={e.code} reason={e.reason!r}")
    except OSError as e:
        print(f"❌ Could not reach relay at {RELAY_URL}: {e}")
