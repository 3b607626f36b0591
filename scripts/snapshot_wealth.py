#!/usr/bin/env python3
"""
Fetch (and optionally persist) the wealth of one maker from the command line.

Uses the same settings as the server (.env): maker list, RPC endpoints, credentials,
database path.

Usage examples:
  python scripts/snapshot_wealth.py --maker 0x80c67432656d59144ceff962e8faf8926599bcf8
  python scripts/snapshot_wealth.py --maker 0x80c6... --save --timeout 60
  python scripts/snapshot_wealth.py --maker 0x80c6... --json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Allow running from the repository root without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.errors import InvalidArgument  # noqa: E402
from core.logging import set_log_level  # noqa: E402
from services.wealth_service import get_wealth_service  # noqa: E402


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Aggregate a maker's balances across chains.")
    p.add_argument("--maker", required=True, help="Maker address")
    p.add_argument("--save", action="store_true", help="Persist the snapshot to the database")
    p.add_argument("--timeout", type=float, default=None, help="Overall deadline in seconds")
    p.add_argument("--json", action="store_true", help="Print the result as JSON")
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g., DEBUG)")
    return p.parse_args()


async def run(args: argparse.Namespace) -> int:
    service = get_wealth_service()
    await service.adapters.initialize_all()
    try:
        try:
            requests = await service.fetch_wealth(args.maker, timeout=args.timeout)
        except InvalidArgument as e:
            print(f"[Error] {e}")
            return 2
        except asyncio.TimeoutError:
            print(f"[Error] Aggregation did not finish within {args.timeout}s")
            return 1

        if args.json:
            print(json.dumps([r.model_dump(mode="json") for r in requests], indent=2))
        else:
            if not requests:
                print(f"[Info] Maker {args.maker} has no entries in the maker list")
            for request in requests:
                print(f"chain {request.chain_id} ({request.chain_name or '?'})")
                for slot in request.balances:
                    value = slot.value if slot.value is not None else "n/a"
                    print(f"  {slot.token_name:<8} {slot.token_address or 'native':<44} {value}")

        if args.save:
            await service.persist_wealth(requests)
            rows = sum(len(r.balances) for r in requests)
            print(f"[OK] Saved {rows} row(s)")

        return 0
    finally:
        await service.adapters.shutdown_all()


def main() -> int:
    args = parse_args()
    if args.log_level:
        set_log_level(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
