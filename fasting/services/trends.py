"""
Chart data derived from a fasting history.

Every function buckets sessions by the calendar day (or hour) of their
start_time in the given timezone. Windows end with the current, partial day.
Nothing here is cached: callers recompute from the full history each time.
"""
from collections import defaultdict

from fasttracker.timezone_utils import local_date, recent_days

WEEKLY_DAYS = 7
SUCCESS_RATE_DAYS = 14
HEATMAP_DAYS = 90
BEST_START_TIMES_LIMIT = 8

# Upper bounds (exclusive) in hours for heatmap levels 1-3; anything above is 4
HEATMAP_BREAKPOINTS = (12, 16, 20)


def heatmap_level(hours):
    """Map a day's total fasted hours to a level between 0 and 4."""
    if hours <= 0:
        return 0
    for level, upper in enumerate(HEATMAP_BREAKPOINTS, start=1):
        if hours < upper:
            return level
    return len(HEATMAP_BREAKPOINTS) + 1


def _day_label(day):
    return day.strftime('%b %d')


def sessions_by_day(sessions, tz):
    """Group sessions by the local calendar date they started on."""
    grouped = defaultdict(list)
    for session in sessions:
        grouped[local_date(session.start_time, tz)].append(session)
    return grouped


def _hours(sessions):
    return sum(session.duration for session in sessions) / 3600


def weekly_trend(sessions, now, tz, days=WEEKLY_DAYS):
    """Total fasted hours and session count for each of the last 7 days."""
    grouped = sessions_by_day(sessions, tz)
    trend = []
    for day in recent_days(now, tz, days):
        day_sessions = grouped.get(day, [])
        trend.append({
            'date': day.isoformat(),
            'label': _day_label(day),
            'hours': round(_hours(day_sessions), 1),
            'sessions': len(day_sessions),
        })
    return trend


def success_rate_trend(sessions, now, tz, days=SUCCESS_RATE_DAYS):
    """Percentage of goal-reached sessions per day over the last 14 days."""
    grouped = sessions_by_day(sessions, tz)
    trend = []
    for day in recent_days(now, tz, days):
        day_sessions = grouped.get(day, [])
        successful = sum(1 for session in day_sessions if session.goal_reached)
        rate = successful / len(day_sessions) * 100 if day_sessions else 0
        trend.append({
            'date': day.isoformat(),
            'label': _day_label(day),
            'rate': round(rate, 1),
        })
    return trend


def best_start_times(sessions, tz, limit=BEST_START_TIMES_LIMIT):
    """
    Most common start hours, busiest first.

    Each entry has the session count and the average duration in hours for
    fasts started in that hour. Hours with no sessions are left out.
    """
    counts = [0] * 24
    totals = [0.0] * 24
    for session in sessions:
        hour = session.start_time.astimezone(tz).hour
        counts[hour] += 1
        totals[hour] += session.duration / 3600

    buckets = [
        {
            'hour': hour,
            'time': f"{hour}:00",
            'sessions': counts[hour],
            'avg_hours': round(totals[hour] / counts[hour], 1),
        }
        for hour in range(24)
        if counts[hour] > 0
    ]
    # Stable sort keeps earlier hours first among equal counts
    buckets.sort(key=lambda bucket: bucket['sessions'], reverse=True)
    return buckets[:limit]


def heatmap(sessions, now, tz, days=HEATMAP_DAYS):
    """Per-day total hours, heatmap level and success flag for the last 90 days."""
    grouped = sessions_by_day(sessions, tz)
    cells = []
    for day in recent_days(now, tz, days):
        day_sessions = grouped.get(day, [])
        total_hours = _hours(day_sessions)
        cells.append({
            'date': day.isoformat(),
            'hours': round(total_hours, 1),
            'level': heatmap_level(total_hours),
            'has_success': any(session.goal_reached for session in day_sessions),
        })
    return cells


def build_charts(sessions, now, tz):
    """All chart series for the dashboard in one dictionary."""
    sessions = list(sessions)
    return {
        'weekly_trend': weekly_trend(sessions, now, tz),
        'success_rate_trend': success_rate_trend(sessions, now, tz),
        'best_start_times': best_start_times(sessions, tz),
        'heatmap': heatmap(sessions, now, tz),
    }
