from django.conf import settings
from django.utils import timezone

from fasttracker.api import InvalidRequest, api_endpoint, parse_number, query_int, read_json, success
from fasttracker.timezone_utils import get_user_timezone
from . import store

MAX_AMOUNT_ML = 5000
MAX_GOAL_ML = 20000
MAX_DAYS = 90


def serialize_log(log):
    """Serialize a hydration log to a dictionary for JSON responses."""
    return {
        'id': log.id,
        'amount': log.amount,
        'goal': log.goal,
        'timestamp': log.timestamp.isoformat(),
    }


def hydration_summary(user, days, now, tz):
    """Logs in the window with their total and the current daily goal."""
    logs = store.list_logs(user, days, now, tz)
    return {
        'logs': [serialize_log(log) for log in logs],
        'total': sum(log.amount for log in logs),
        'goal': store.current_goal(user),
    }


@api_endpoint(["GET", "POST"])
def hydration_logs(request):
    """
    GET: today's hydration logs, their total and the daily goal.
        Query params:
            - days: integer (default 1, today only)

    POST: log a drink.
        Expects JSON data:
            - amount: integer ml (required)
            - goal: integer ml (optional, default HYDRATION_DEFAULT_GOAL_ML)
    """
    if request.method == 'GET':
        days = query_int(request, 'days', 1, maximum=MAX_DAYS)
        return success(hydration_summary(request.user, days, timezone.now(), get_user_timezone(request)))

    data = read_json(request)
    if data.get('amount') in (None, '', 0):
        raise InvalidRequest('Amount is required')
    amount = parse_number(data['amount'], 'amount', minimum=1, maximum=MAX_AMOUNT_ML, integer=True)

    goal = data.get('goal')
    if goal in (None, ''):
        goal = settings.HYDRATION_DEFAULT_GOAL_ML
    else:
        goal = parse_number(goal, 'goal', minimum=1, maximum=MAX_GOAL_ML, integer=True)

    log = store.create(request.user, amount, goal)
    return success(serialize_log(log), status=201)


@api_endpoint(["DELETE"])
def delete_hydration_log(request, log_id):
    """Delete one of the signed-in user's hydration logs."""
    store.delete(request.user, log_id)
    return success({'id': log_id})
