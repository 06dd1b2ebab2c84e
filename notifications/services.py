"""
Notification delivery for the tracker.

notify() persists a notification for the user to pick up. When the user has
turned notifications off it quietly does nothing and returns None; callers
must treat that as a normal outcome.
"""
import logging

from django.db import transaction

from fasting.models import FastingSession
from fasting.services.analytics import summarize
from fasting.services.streaks import calculate_streaks
from .models import Notification, NotificationPreference

logger = logging.getLogger(__name__)

GOAL_REACHED_TAG = 'goal-reached'
REMINDER_TAG = 'reminder'
MILESTONE_TAG_PREFIX = 'milestone:'

MILESTONE_MESSAGES = {
    '10_sessions': '🏆 10 fasting sessions completed!',
    '50_hours': '⭐ 50 total hours fasted!',
    '100_hours': '🌟 100 total hours fasted!',
    '7_day_streak': '🔥 7-day streak achieved!',
    '30_day_streak': "💪 30-day streak! You're unstoppable!",
}


def notifications_enabled(user):
    """Users without a saved preference get notifications."""
    preference = NotificationPreference.objects.filter(user=user).first()
    return preference is None or preference.enabled


def set_notifications_enabled(user, enabled):
    preference, _ = NotificationPreference.objects.update_or_create(
        user=user,
        defaults={'enabled': enabled},
    )
    logger.info(f"User {user.pk} {'enabled' if enabled else 'disabled'} notifications")
    return preference


def notify(user, title, body='', tag='', data=None):
    """
    Show a notification to the user.

    An undismissed notification with the same non-empty tag is replaced.
    Returns the Notification, or None when the user has notifications off.
    """
    if not notifications_enabled(user):
        logger.info(f"Notifications off for user {user.pk}; dropped '{title}'")
        return None

    data = data or {}
    with transaction.atomic():
        existing = None
        if tag:
            existing = (
                Notification.objects.select_for_update()
                .filter(user=user, tag=tag, dismissed_at__isnull=True)
                .first()
            )
        if existing is not None:
            existing.title = title
            existing.body = body
            existing.data = data
            existing.save(update_fields=['title', 'body', 'data', 'updated_at'])
            notification = existing
        else:
            notification = Notification.objects.create(
                user=user, title=title, body=body, tag=tag, data=data
            )

    logger.info(f"Notified user {user.pk}: {title}")
    return notification


def goal_reached_tag(session):
    return f"{GOAL_REACHED_TAG}:{session.pk}:{session.goal_hours:g}"


def notify_goal_reached(user, session):
    """
    Tell the user their active fast has reached its goal.

    Sent at most once per session and goal, even after it is dismissed;
    changing the goal allows one more. Returns None when already sent.
    """
    tag = goal_reached_tag(session)
    with transaction.atomic():
        # Serialize concurrent polls of the same session
        FastingSession.objects.select_for_update().filter(pk=session.pk).first()
        if Notification.objects.filter(user=user, tag=tag).exists():
            return None
        hours = session.goal_hours
        return notify(
            user,
            '🎉 Fasting Goal Reached!',
            f"Congratulations! You've completed your {hours:g}-hour fast!",
            tag=tag,
            data={'type': 'goal-reached', 'hours': hours, 'session_id': session.pk},
        )


def notify_reminder(user, message):
    return notify(
        user,
        'Fasting Reminder',
        message,
        tag=REMINDER_TAG,
        data={'type': 'reminder'},
    )


def notify_milestone(user, milestone):
    return notify(
        user,
        'Milestone Unlocked!',
        MILESTONE_MESSAGES.get(milestone, 'Milestone achieved!'),
        tag=f"{MILESTONE_TAG_PREFIX}{milestone}",
        data={'type': 'milestone', 'milestone': milestone},
    )


def reached_milestones(summary, streaks):
    """Milestone keys a history qualifies for, in display order."""
    reached = []
    if summary.total_sessions >= 10:
        reached.append('10_sessions')
    if summary.total_hours_fasted >= 50:
        reached.append('50_hours')
    if summary.total_hours_fasted >= 100:
        reached.append('100_hours')
    if streaks.longest >= 7:
        reached.append('7_day_streak')
    if streaks.longest >= 30:
        reached.append('30_day_streak')
    return reached


def check_milestones(user, sessions, tz):
    """
    Notify the user of milestones their completed sessions have reached.

    Each milestone is announced at most once per user, even after the
    notification is dismissed. Returns the notifications created.

    Nothing is recorded while notifications are off, so milestones reached
    in that time are announced together at the first check after the user
    turns notifications back on.
    """
    sessions = list(sessions)
    summary = summarize(sessions)
    streaks = calculate_streaks(sessions, tz)

    already_sent = set(
        Notification.objects.filter(user=user, tag__startswith=MILESTONE_TAG_PREFIX)
        .values_list('tag', flat=True)
    )

    created = []
    for milestone in reached_milestones(summary, streaks):
        if f"{MILESTONE_TAG_PREFIX}{milestone}" in already_sent:
            continue
        notification = notify_milestone(user, milestone)
        if notification is not None:
            created.append(notification)
    return created
