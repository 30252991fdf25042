#!/usr/bin/env python3
"""Visitors globe traffic simulator.

Sends synthetic visits to the server with the geo headers the hosting
platform would add, then prints what the visitor list looks like.

Usage:
    # 20 visitors over 30 seconds
    python -m tools.simulator.simulate --server http://localhost:8000 --visitors 20 --duration 30

    # Fill past the rolling-window cap
    python -m tools.simulator.simulate --visitors 250 --duration 10

    # Only country headers, no coordinates (exercises the centroid table)
    python -m tools.simulator.simulate --country-only
"""

from __future__ import annotations

import argparse
import asyncio
import random
import time
from dataclasses import dataclass

import httpx

# A few real countries plus codes the centroid table does not know.
COUNTRIES = ["US", "FR", "DE", "IN", "BR", "JP", "AU", "ZA", "GB", "CA", "QQ", "ZZ"]


@dataclass
class SimVisitor:
    country: str
    lat: float | None = None
    lng: float | None = None
    sent: bool = False
    error: bool = False


def make_visitor(country_only: bool) -> SimVisitor:
    """Create a visitor somewhere on the globe."""
    return SimVisitor(
        country=random.choice(COUNTRIES),
        lat=None if country_only else round(random.uniform(-60, 70), 4),
        lng=None if country_only else round(random.uniform(-180, 180), 4),
    )


def visitor_headers(visitor: SimVisitor) -> dict[str, str]:
    headers = {"x-vercel-ip-country": visitor.country}
    if visitor.lat is not None:
        headers["x-vercel-ip-latitude"] = str(visitor.lat)
        headers["x-vercel-ip-longitude"] = str(visitor.lng)
    return headers


async def run_visitor(
    client: httpx.AsyncClient,
    visitor: SimVisitor,
    server_url: str,
    delay: float,
) -> None:
    """Wait ``delay`` seconds, then record one visit."""
    await asyncio.sleep(delay)
    try:
        resp = await client.post(f"{server_url}/api/visitors", headers=visitor_headers(visitor))
        if resp.status_code == 200:
            visitor.sent = True
        else:
            visitor.error = True
    except httpx.RequestError:
        visitor.error = True


async def run_simulation(args: argparse.Namespace) -> None:
    """Run the full simulation."""
    visitors = [make_visitor(args.country_only) for _ in range(args.visitors)]

    print(f"Starting simulation: {args.visitors} visitors over {args.duration}s")
    print(f"  Server: {args.server}")
    print(f"  Country only: {args.country_only}")
    print()

    start = time.monotonic()

    async with httpx.AsyncClient(timeout=10.0) as client:
        tasks = [
            run_visitor(client, v, args.server, random.uniform(0, args.duration))
            for v in visitors
        ]
        await asyncio.gather(*tasks)

        elapsed = time.monotonic() - start
        print(f"\nSimulation complete in {elapsed:.1f}s")
        print(f"  Visits sent: {sum(v.sent for v in visitors)}")
        print(f"  Errors: {sum(v.error for v in visitors)}")

        try:
            resp = await client.get(f"{args.server}/api/visitors")
            entries = resp.json()["entries"]
            cells = {(e["lat"], e["lng"]) for e in entries}
            print(f"\nVisitor list:")
            print(f"  Entries: {len(entries)}")
            print(f"  Distinct grid cells: {len(cells)}")
            stats = (await client.get(f"{args.server}/api/stats")).json()
            print(f"  Store errors: {stats['store_errors']}")
        except (httpx.HTTPError, ValueError, KeyError) as exc:
            print(f"\nCould not read back the visitor list: {exc}")


def main():
    parser = argparse.ArgumentParser(description="Visitors globe traffic simulator")
    parser.add_argument("--server", default="http://localhost:8000", help="Server URL")
    parser.add_argument("--visitors", type=int, default=20, help="Number of simulated visits")
    parser.add_argument("--duration", type=float, default=30, help="Spread visits over N seconds")
    parser.add_argument("--country-only", action="store_true",
                        help="Send only the country header, no coordinates")

    args = parser.parse_args()
    asyncio.run(run_simulation(args))


if __name__ == "__main__":
    main()
