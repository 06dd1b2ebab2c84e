from datetime import datetime, timedelta

import pytz
from django.conf import settings
from django.utils import timezone


def get_reference_timezone():
    """The configured reference time zone used when a request carries none."""
    try:
        return pytz.timezone(settings.TIME_ZONE)
    except pytz.exceptions.UnknownTimeZoneError:
        return pytz.UTC


def get_user_timezone(request):
    """
    Get the user's timezone from the cookie set by JavaScript.
    Falls back to the reference time zone if no timezone is set.
    """
    user_tz_name = request.COOKIES.get('user_timezone')
    if not user_tz_name:
        return get_reference_timezone()
    try:
        return pytz.timezone(user_tz_name)
    except pytz.exceptions.UnknownTimeZoneError:
        return get_reference_timezone()


def local_date(value, tz):
    """Calendar date of an aware instant in the given timezone."""
    return value.astimezone(tz).date()


def day_bounds(day, tz):
    """
    Timezone-aware (start, end) of a calendar day: 00:00:00.000000 to
    23:59:59.999999 local time. Returns a new tuple; nothing is mutated.
    """
    start = tz.localize(datetime.combine(day, datetime.min.time()))
    end = tz.localize(datetime.combine(day, datetime.max.time()))
    return start, end


def recent_days(now, tz, count):
    """The last ``count`` calendar days ending with today, oldest first."""
    today = local_date(now, tz)
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def get_user_today(request):
    """
    Get today's date in the user's timezone.
    Returns both the date object and timezone-aware start/end datetimes.
    """
    user_tz = get_user_timezone(request)
    today = local_date(timezone.now(), user_tz)
    today_start, today_end = day_bounds(today, user_tz)
    return today, today_start, today_end
