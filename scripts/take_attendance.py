"""Submit attendance from the command line.

The fix comes from --lat/--lng (standing in for the device location provider).
The distance check is shown first and nothing is saved until the user confirms.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.geo_attendance.geo_attendance.common.datetime_utils import now_local
from src.geo_attendance.geo_attendance.container import build_container
from src.geo_attendance.geo_attendance.core.exceptions import DomainError
from src.geo_attendance.geo_attendance.geometry.model import Coordinate
from src.geo_attendance.geo_attendance.location.acquirer import LocationAcquirer
from src.geo_attendance.geo_attendance.location.provider import StaticLocationProvider


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("session_id")
    parser.add_argument("claimant_id")
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lng", type=float, required=True)
    parser.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    try:
        provider = StaticLocationProvider(Coordinate(latitude=args.lat, longitude=args.lng))
        acquirer = LocationAcquirer(
            provider,
            high_accuracy=settings.LOCATION_HIGH_ACCURACY,
            timeout_ms=settings.LOCATION_TIMEOUT_MS,
        )
        location = acquirer.acquire().raise_for_error()

        check = container.attendance_service.preview(args.session_id, location)
        verdict = "inside" if check.within_radius else "OUTSIDE"
        print(f"You are {check.distance_meters:.0f} m from the anchor ({verdict} the {check.radius_meters:.0f} m radius).")

        if not args.yes and input("Submit attendance? [y/N] ").strip().lower() != "y":
            print("Cancelled.")
            return

        record = container.attendance_service.submit(args.session_id, args.claimant_id, location, now_local())
    except DomainError as e:
        raise SystemExit(f"ERROR: {e}")

    print(f"OK: Recorded {record.status.value} ({record.distance_meters:.0f} m)")


if __name__ == "__main__":
    main()
