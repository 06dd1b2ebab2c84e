import logging

from django.conf import settings
from django.utils import timezone

from fasttracker.api import (
    InvalidRequest,
    Conflict,
    api_endpoint,
    parse_instant,
    parse_number,
    query_int,
    read_json,
    success,
)
from fasttracker.timezone_utils import get_user_timezone
from notifications.services import check_milestones, notify_goal_reached
from . import store
from .services.analytics import goal_progress
from .services.formatting import clock_parts, format_datetime, format_duration
from .services.stages import classify
from .services.timer import elapsed_since

logger = logging.getLogger(__name__)

MAX_GOAL_HOURS = 168
MAX_HISTORY_LIMIT = 500


def serialize_session(session, tz=None):
    """Serialize a fasting session to a dictionary for JSON responses."""
    data = {
        'id': session.id,
        'start_time': session.start_time.isoformat(),
        'end_time': session.end_time.isoformat() if session.end_time else None,
        'duration': session.duration,
        'duration_display': format_duration(session.duration),
        'goal_hours': session.goal_hours,
        'goal_reached': session.goal_reached,
        'is_active': session.is_active,
        'notes': session.notes,
    }
    if tz is not None:
        data['start_display'] = format_datetime(session.start_time, tz)
        data['end_display'] = format_datetime(session.end_time, tz)
    return data


def live_status(session, now):
    """Elapsed time, goal progress and stage for an active session."""
    elapsed = elapsed_since(session.start_time, now)
    return {
        'elapsed_seconds': elapsed,
        'clock': clock_parts(elapsed),
        'progress': round(goal_progress(elapsed, session.goal_hours), 1),
        'goal_reached': elapsed >= session.goal_seconds,
        'stage': classify(elapsed).as_dict(),
    }


def _parse_goal_hours(value):
    goal_hours = parse_number(value, 'goal_hours', maximum=MAX_GOAL_HOURS)
    if goal_hours <= 0:
        raise InvalidRequest('goal_hours must be positive')
    return goal_hours


@api_endpoint(["GET"])
def session_history(request):
    """
    Completed fasting sessions for the signed-in user, most recent first.

    Query params:
        - limit: integer (default FASTING_HISTORY_LIMIT)
    """
    limit = query_int(request, 'limit', settings.FASTING_HISTORY_LIMIT, maximum=MAX_HISTORY_LIMIT)
    tz = get_user_timezone(request)
    sessions = store.list_history(request.user, limit)
    return success([serialize_session(session, tz) for session in sessions])


@api_endpoint(["GET"])
def active_session(request):
    """
    The active session with its live status, or null when not fasting.

    The dashboard polls this every second; the first poll past the goal
    sends the goal-reached notification.
    """
    session = store.list_active(request.user)
    if session is None:
        return success(None)

    data = serialize_session(session, get_user_timezone(request))
    data['status'] = live_status(session, timezone.now())
    if data['status']['goal_reached']:
        notify_goal_reached(request.user, session)
    return success(data)


@api_endpoint(["POST"])
def start_session(request):
    """
    Start a fast.

    Expects JSON data:
        - start_time: ISO 8601 string or epoch milliseconds (optional, default now)
        - goal_hours: number (optional, default FASTING_DEFAULT_GOAL_HOURS)
    """
    data = read_json(request)
    start_time = parse_instant(data.get('start_time'), 'start_time') or timezone.now()
    goal_hours = data.get('goal_hours')
    goal_hours = (
        settings.FASTING_DEFAULT_GOAL_HOURS if goal_hours in (None, '') else _parse_goal_hours(goal_hours)
    )

    # Refuse early when the user is already fasting; the store checks again
    if store.list_active(request.user) is not None:
        raise Conflict('An active session already exists')

    session = store.create(request.user, start_time, goal_hours)
    return success(serialize_session(session), status=201)


@api_endpoint(["POST"])
def stop_session(request):
    """
    Stop the active fast.

    Expects JSON data:
        - end_time: ISO 8601 string or epoch milliseconds (optional, default now)
        - duration: integer seconds (optional, default end_time - start_time)
        - notes: string (optional)
    """
    data = read_json(request)
    end_time = parse_instant(data.get('end_time'), 'end_time') or timezone.now()
    duration = data.get('duration')
    if duration is not None:
        duration = parse_number(duration, 'duration', minimum=0, integer=True)
    notes = str(data.get('notes') or '').strip()
    if len(notes) > 500:
        raise InvalidRequest('notes must be at most 500 characters')

    session = store.complete(request.user, end_time, duration=duration, notes=notes)

    tz = get_user_timezone(request)
    history = store.list_history(request.user, None)
    # The fast is already stopped and committed at this point
    try:
        milestones = check_milestones(request.user, history, tz)
    except Exception:
        logger.exception(f"Milestone check failed for user {request.user.pk}")
    else:
        if milestones:
            logger.info(f"User {request.user.pk} unlocked {len(milestones)} milestone(s)")

    return success(serialize_session(session, tz))


@api_endpoint(["POST", "PATCH"])
def update_goal(request):
    """
    Change the goal of the active fast.

    Expects JSON data:
        - goal_hours: number
    """
    data = read_json(request)
    if data.get('goal_hours') in (None, ''):
        raise InvalidRequest('goal_hours is required')
    session = store.update_goal(request.user, _parse_goal_hours(data['goal_hours']))

    payload = serialize_session(session)
    payload['status'] = live_status(session, timezone.now())
    return success(payload)


@api_endpoint(["DELETE"])
def delete_session(request, session_id):
    """Delete one of the signed-in user's sessions."""
    session = store.delete(request.user, session_id)
    return success({'id': session.id})
