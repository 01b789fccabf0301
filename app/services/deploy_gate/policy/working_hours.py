"""Working-hours window used to defer deploys."""

from datetime import datetime, tzinfo

WORKING_DAYS = range(0, 5)  # Monday..Friday
WORKING_HOURS = range(7, 17)  # 07:00 up to, not including, 17:00


def is_working_hour(moment: datetime) -> bool:
    return moment.weekday() in WORKING_DAYS and moment.hour in WORKING_HOURS


def is_allowed_to_deploy_now(
    deploy_only_in_working_hours: bool, now: datetime, zone: tzinfo
) -> bool:
    """
    Check whether a deploy may start at `now`.

    Args:
        deploy_only_in_working_hours: When False the clock is ignored.
        now: Current moment, timezone-aware.
        zone: Zone the working hours are defined in.
    """
    if not deploy_only_in_working_hours:
        return True
    return is_working_hour(now.astimezone(zone))
