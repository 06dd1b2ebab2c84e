from datetime import datetime, timedelta

import pytz

from fasting.models import FastingSession

REFERENCE_NOW = datetime(2025, 3, 20, 15, 0, tzinfo=pytz.UTC)


def make_session(start_time, hours=16, goal_hours=16, goal_reached=None, **kwargs):
    """Unsaved completed session for the pure analytics functions."""
    duration = int(hours * 3600)
    if goal_reached is None:
        goal_reached = duration >= goal_hours * 3600
    return FastingSession(
        start_time=start_time,
        end_time=start_time + timedelta(seconds=duration),
        duration=duration,
        goal_hours=goal_hours,
        goal_reached=goal_reached,
        is_active=False,
        **kwargs
    )


def days_ago(days, hour=8):
    """A UTC instant on the calendar day ``days`` before REFERENCE_NOW."""
    day = REFERENCE_NOW - timedelta(days=days)
    return day.replace(hour=hour, minute=0, second=0, microsecond=0)
