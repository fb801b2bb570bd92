"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the lifecycle and submission rules live in services.
"""

import importlib
from datetime import timedelta

from config import get_settings_module

from src.geo_attendance.geo_attendance.common.datetime_utils import now_local
from src.geo_attendance.geo_attendance.container import build_container
from src.geo_attendance.geo_attendance.geometry.model import Coordinate


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    sessions = container.session_service
    attendance = container.attendance_service

    now = now_local()
    session = sessions.create_session(
        operator_id="officer-01",
        anchor=Coordinate(latitude=13.6151, longitude=123.4835),
        radius_meters=50,
        start_time=now,
        time_limit_minutes=30,
    )
    sessions.start(session.session_id)

    record = attendance.submit(
        session.session_id,
        "cadet-001",
        Coordinate(latitude=13.61515, longitude=123.48352),
        now + timedelta(minutes=5),
    )
    print("submitted:", record.status.value, f"{record.distance_meters:.1f} m")

    result = sessions.end(session.session_id, now=now + timedelta(minutes=31))
    print("marked absent:", result.count)
    print(attendance.summarize(session.session_id).to_dict())


if __name__ == "__main__":
    main()
