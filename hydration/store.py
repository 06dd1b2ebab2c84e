"""
Hydration log store, scoped to one user.
"""
import logging

from django.conf import settings

from fasttracker.api import NotFound
from fasttracker.timezone_utils import day_bounds, recent_days
from .models import HydrationLog

logger = logging.getLogger(__name__)


def list_logs(user, days, now, tz):
    """Logs from the start of the first of the last ``days`` calendar days until the end of today."""
    window = recent_days(now, tz, days)
    start, _ = day_bounds(window[0], tz)
    _, end = day_bounds(window[-1], tz)
    return list(
        HydrationLog.objects.filter(user=user, timestamp__gte=start, timestamp__lte=end)
        .order_by('-timestamp', '-id')
    )


def current_goal(user):
    """Goal of the most recently created log, or the configured default."""
    latest = HydrationLog.objects.filter(user=user).order_by('-created_at', '-id').first()
    return latest.goal if latest else settings.HYDRATION_DEFAULT_GOAL_ML


def create(user, amount, goal):
    log = HydrationLog.objects.create(user=user, amount=amount, goal=goal)
    logger.info(f"User {user.pk} logged {amount}ml (goal {goal}ml)")
    return log


def delete(user, log_id):
    try:
        log = HydrationLog.objects.get(id=log_id, user=user)
    except HydrationLog.DoesNotExist:
        raise NotFound('Hydration log not found')
    log.delete()
    logger.info(f"User {user.pk} deleted hydration log {log_id}")
