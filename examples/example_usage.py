"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the check-in/check-out rules live in the services.
"""

from src.work_tracker.work_tracker.container import build_container
from src.work_tracker.work_tracker.storage.memory_store import InMemoryKeyValueStore
from src.work_tracker.work_tracker.worklogs.model import GeoPoint
from src.work_tracker.work_tracker.worklogs.proximity import distance_meters


class DemoSettings:
    ADMIN_USERNAMES = ("bamboo",)
    MAX_CHECKOUT_DISTANCE_METERS = 100
    ENFORCE_CHECKOUT_PROXIMITY = True
    TIMEZONE = "Asia/Bangkok"
    GEMINI_API_KEY = None


def main():
    container = build_container(DemoSettings, store=InMemoryKeyValueStore())

    user = container.identity_service.register("alice")
    log = container.work_session_service.check_in(user.username, "Install router", 13.7563, 100.5018)
    print("active:", container.work_session_service.active_job(user.username))

    print("distance:", round(distance_meters(log.check_in_location, GeoPoint(13.7570, 100.5018)), 1), "m")
    done = container.work_session_service.check_out(log.id, 13.7570, 100.5018, "Completed Install router.")
    print("closed:", done.to_dict())


if __name__ == "__main__":
    main()
