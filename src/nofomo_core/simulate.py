"""Post canned market scenarios to a running decision API.

Usage: python -m nofomo_core.simulate [--base-url http://localhost:8000]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os

import httpx

SCENARIOS = [
    {
        "name": "Calm market / normal sentiment",
        "body": {
            "symbol": "BTCUSDT",
            "direction": "LONG",
            "marketData": {
                "price": "68000",
                "change24h": "1.4",
                "high24h": "68900",
                "low24h": "66400",
                "fearGreedIndex": 51,
            },
        },
    },
    {
        "name": "Volatile market / greed high",
        "body": {
            "symbol": "ETHUSDT",
            "direction": "LONG",
            "marketData": {
                "price": "4100",
                "change24h": "8.5",
                "high24h": "4300",
                "low24h": "3920",
                "fearGreedIndex": 83,
            },
        },
    },
    {
        "name": "Panic market / fast drawdown",
        "body": {
            "symbol": "SOLUSDT",
            "direction": "SHORT",
            "marketData": {
                "price": "120",
                "change24h": "-11.2",
                "high24h": "141",
                "low24h": "116",
                "fearGreedIndex": 16,
            },
        },
    },
]


async def run(base_url: str) -> None:
    print(f"Using API: {base_url}")
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        for scenario in SCENARIOS:
            response = await client.post("/decision", json=scenario["body"])
            print(f"\n=== {scenario['name']} ===")
            print(f"status: {response.status_code}")
            print(json.dumps(response.json(), indent=2))

        response = await client.get("/decision-log/summary", params={"limit": len(SCENARIOS)})
        print("\n=== Decision log summary ===")
        print(json.dumps(response.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="NoFOMO decision simulation")
    parser.add_argument(
        "--base-url",
        default=os.environ.get("BASE_URL", "http://localhost:8000"),
        help="Decision API base URL",
    )
    args = parser.parse_args()
    asyncio.run(run(args.base_url))


if __name__ == "__main__":
    main()
