from django.utils import timezone

from fasttracker.api import InvalidRequest, NotFound, api_endpoint, read_json, success
from .models import Notification
from .services import notifications_enabled, set_notifications_enabled


def serialize_notification(notification):
    """Serialize a notification to a dictionary for JSON responses."""
    return {
        'id': notification.id,
        'title': notification.title,
        'body': notification.body,
        'tag': notification.tag,
        'data': notification.data,
        'created_at': notification.created_at.isoformat(),
    }


@api_endpoint(["GET"])
def notification_list(request):
    """Undismissed notifications for the signed-in user, newest first."""
    notifications = Notification.objects.filter(user=request.user, dismissed_at__isnull=True)
    return success([serialize_notification(n) for n in notifications])


@api_endpoint(["POST"])
def dismiss_notification(request, notification_id):
    """Mark a notification as dismissed."""
    try:
        notification = Notification.objects.get(id=notification_id, user=request.user)
    except Notification.DoesNotExist:
        raise NotFound('Notification not found')

    if notification.dismissed_at is None:
        notification.dismissed_at = timezone.now()
        notification.save(update_fields=['dismissed_at', 'updated_at'])
    return success({'id': notification.id})


@api_endpoint(["GET", "POST"])
def notification_preferences(request):
    """
    Read or change whether notifications are shown.

    POST expects JSON data:
        - enabled: boolean
    """
    if request.method == 'POST':
        data = read_json(request)
        enabled = data.get('enabled')
        if not isinstance(enabled, bool):
            raise InvalidRequest('enabled must be true or false')
        set_notifications_enabled(request.user, enabled)

    return success({'enabled': notifications_enabled(request.user)})
