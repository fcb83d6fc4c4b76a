from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from fare_compare.config import settings
from fare_compare.core.engine import build_pipeline
from fare_compare.errors import InternalRecoveryFailure, InvalidLocation


def main() -> None:
    ap = argparse.ArgumentParser(description="Compare estimated cab fares between two places")
    ap.add_argument("pickup", help="Pickup address, e.g. 'Chennai Airport'")
    ap.add_argument("drop", help="Drop address, e.g. 'Salem'")
    ap.add_argument("--offline", action="store_true", help="Skip live geocoding/routing")
    ap.add_argument("--json", action="store_true", help="Print the API response body")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [fare-compare] %(levelname)s %(message)s",
    )

    if args.offline:
        pipeline = build_pipeline("offline", "offline", cfg=settings)
    else:
        pipeline = build_pipeline(settings.geocoder, settings.router, cfg=settings)

    console = Console()
    try:
        result = pipeline.estimate(args.pickup, args.drop)
    except (InvalidLocation, InternalRecoveryFailure) as e:
        console.print(f"[red]{e.message}[/red]")
        sys.exit(2)

    if args.json:
        console.print_json(json.dumps(result.to_response()))
        return

    title = f"{args.pickup} → {args.drop}"
    if result.is_estimated:
        title += " (estimated)"
    table = Table(title=title)
    table.add_column("Provider")
    table.add_column("Class")
    table.add_column("Fare ₹", justify="right")

    for provider, classes in result.fare_table().items():
        for vehicle_class, price in classes.items():
            table.add_row(provider, vehicle_class, f"{price:.2f}")

    console.print(table)
    console.print(
        f"Distance {result.distance_km:.2f} km · Duration {result.duration_min:.0f} min · "
        f"Surge x{result.surge_multiplier} · Outstation: {'yes' if result.is_outstation else 'no'} · "
        f"Route: {result.route.source}"
    )


if __name__ == "__main__":
    main()
