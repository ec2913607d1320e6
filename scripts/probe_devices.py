#!/usr/bin/env python3
"""Live Nexx account probe.

Logs in with ``NEXX_USERNAME`` / ``NEXX_PASSWORD`` (plus any other
``NEXX_*`` settings), lists every device with its classification, and
optionally polls one device's state.

Examples::

    python scripts/probe_devices.py
    python scripts/probe_devices.py --state <device-id> -v
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pynexx import NexxClient, NexxConfig, NexxError, classify_device  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--state", metavar="DEVICE_ID", help="poll the state of this device after listing")
    parser.add_argument("--json", action="store_true", help="print raw device records as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable DEBUG logging (secrets are redacted)")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    config = NexxConfig.from_env()
    async with NexxClient(config) as client:
        await client.login()
        records = await client.get_devices()

        if args.json:
            print(json.dumps([record.raw for record in records], indent=2, default=str))
        else:
            for record in records:
                device = classify_device(record)
                kind = device.kind if device is not None else "unsupported"
                print(
                    f"{record.device_id:<24} {kind:<12} {record.product_code:<8} "
                    f"{record.status.name:<8} {record.last_operation_timestamp}  {record.nickname}"
                )

        if args.state:
            state = await client.get_device_state(args.state)
            print(f"\n{args.state}: status={state.status.name} last_operation={state.last_operation_timestamp}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except NexxError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
