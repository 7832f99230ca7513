#!/usr/bin/env python3
"""Dump the fleet and profile visible to one user.

Signs in, opens a console session and prints the vehicle list, the
overview aggregates and the profile, either as text or as JSON.

Usage
-----
Set environment variables and run::

    export FLEET_BASE_URL="https://<project>.supabase.co"
    export FLEET_API_KEY="<anon key>"
    export FLEET_EMAIL="you@example.com"
    export FLEET_PASSWORD="your-password"
    python scripts/dump_fleet.py

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --sample             Serve vehicles from the built-in sample fleet
    --verbose            Enable debug logging (bodies redacted)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from fleetdesk import FleetClient, FleetConfig, FleetError  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


def _vehicle_line(vehicle: Any) -> str:
    return (
        f"  {vehicle.id:<34} {vehicle.name:<22} {vehicle.license_plate:<10} "
        f"{vehicle.status.value:<12} fuel={vehicle.fuel_level:>3}% mileage={vehicle.mileage}"
    )


async def main() -> int:
    parser = argparse.ArgumentParser(description="Dump the fleet and profile for one user.")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--sample", action="store_true", help="Use the built-in sample fleet for vehicles")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    email = os.environ.get("FLEET_EMAIL", "")
    password = os.environ.get("FLEET_PASSWORD", "")
    if not email or not password:
        print("FLEET_EMAIL and FLEET_PASSWORD must be set", file=sys.stderr)
        return 2

    overrides: dict[str, Any] = {"api_trace_enabled": args.verbose}
    if args.sample:
        overrides["vehicle_source"] = "sample"
    config = FleetConfig.from_env(**overrides)

    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat()}
    out: list[str] = [_section("fleetdesk dump_fleet"), f"  time      : {result['timestamp']}"]

    try:
        async with FleetClient(config) as client:
            session = await client.login(email, password)
            result["user_id"] = session.user_id
            out.append(f"  user_id   : {session.user_id}")

            console = await client.open_console()
            for notice in console.drain_notices():
                out.append(f"  [{notice.level.value}] {notice.title}: {notice.message}")

            stats = console.aggregates()
            result["aggregates"] = stats.model_dump()
            out.append(_section("OVERVIEW"))
            out.append(
                f"  total={stats.total} active={stats.active_count} "
                f"maintenance={stats.maintenance_count} avg_fuel={stats.average_fuel}%"
            )

            result["vehicles"] = [vehicle.to_payload() for vehicle in console.vehicles]
            out.append(_section(f"VEHICLES ({len(console.vehicles)})"))
            out.extend(_vehicle_line(vehicle) for vehicle in console.vehicles)

            profile = console.profile
            result["profile"] = profile.to_payload() if profile is not None else None
            out.append(_section("PROFILE"))
            if profile is not None:
                for key, value in profile.to_payload().items():
                    out.append(f"  {key:<10}: {value}")

            await client.sign_out()
    except FleetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json_mode:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    else:
        payload = "\n".join(out)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Written to {args.output}", file=sys.stderr)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
