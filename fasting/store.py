"""
Session-log store: every read and write of FastingSession rows goes
through here, scoped to one user.
"""
import logging

from django.db import IntegrityError, transaction

from fasttracker.api import Conflict, NotFound
from .models import FastingSession
from .services.timer import elapsed_since

logger = logging.getLogger(__name__)


def list_active(user):
    """The user's active session, or None."""
    return FastingSession.objects.filter(user=user, is_active=True).first()


def list_history(user, limit):
    """Completed sessions, most recent first."""
    return list(
        FastingSession.objects.filter(user=user, is_active=False)
        .order_by('-start_time', '-id')[:limit]
    )


def create(user, start_time, goal_hours):
    """Start a new fast. Raises Conflict if one is already active."""
    try:
        with transaction.atomic():
            if FastingSession.objects.select_for_update().filter(user=user, is_active=True).exists():
                raise Conflict('An active session already exists')
            session = FastingSession.objects.create(
                user=user,
                start_time=start_time,
                goal_hours=goal_hours,
                is_active=True,
            )
    except IntegrityError:
        # Lost a race with another request for the same user
        if FastingSession.objects.filter(user=user, is_active=True).exists():
            raise Conflict('An active session already exists')
        raise

    logger.info(f"User {user.pk} started fast {session.pk} with a {goal_hours}h goal")
    return session


def complete(user, end_time, duration=None, notes=''):
    """
    Stop the active fast.

    duration defaults to the whole seconds between start and end_time.
    goal_reached is derived from duration here and never changes afterwards.
    Raises Conflict when no fast is active.
    """
    with transaction.atomic():
        session = (
            FastingSession.objects.select_for_update()
            .filter(user=user, is_active=True)
            .first()
        )
        if session is None:
            raise Conflict('No active session found')

        if duration is None:
            duration = elapsed_since(session.start_time, end_time)

        session.end_time = end_time
        session.duration = duration
        session.goal_reached = duration >= session.goal_seconds
        session.is_active = False
        if notes:
            session.notes = notes
        session.save(update_fields=[
            'end_time', 'duration', 'goal_reached', 'is_active', 'notes', 'updated_at'
        ])

    logger.info(
        f"User {user.pk} stopped fast {session.pk} after {duration}s "
        f"(goal {'reached' if session.goal_reached else 'missed'})"
    )
    return session


def update_goal(user, goal_hours):
    """Change the goal of the active fast. Raises Conflict when none is active."""
    with transaction.atomic():
        session = (
            FastingSession.objects.select_for_update()
            .filter(user=user, is_active=True)
            .first()
        )
        if session is None:
            raise Conflict('No active session found')
        session.goal_hours = goal_hours
        session.save(update_fields=['goal_hours', 'updated_at'])

    logger.info(f"User {user.pk} changed goal of fast {session.pk} to {goal_hours}h")
    return session


def delete(user, session_id):
    """Delete one of the user's sessions and return it. Raises NotFound."""
    try:
        session = FastingSession.objects.get(id=session_id, user=user)
    except FastingSession.DoesNotExist:
        raise NotFound('Session not found')
    session.delete()
    session.id = session_id
    logger.info(f"User {user.pk} deleted fast {session_id}")
    return session
