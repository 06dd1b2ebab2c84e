from django.conf import settings
from django.db import models


class Notification(models.Model):
    """
    A persisted notification shown to the user until dismissed.

    Notifications sharing a tag replace one another while undismissed, so
    only the latest 'goal-reached' or 'reminder' message is on screen.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    title = models.CharField(max_length=200)
    body = models.TextField(blank=True, default='')
    tag = models.CharField(
        max_length=100,
        blank=True,
        default='',
        db_index=True,
        help_text="Notifications with the same tag replace each other"
    )
    data = models.JSONField(default=dict, blank=True)
    dismissed_at = models.DateTimeField(null=True, blank=True)

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'dismissed_at'], name='notif_user_dismissed_idx'),
        ]
        verbose_name = 'Notification'
        verbose_name_plural = 'Notifications'

    def __str__(self):
        return f"{self.title} for {self.user}"

    @property
    def is_dismissed(self):
        return self.dismissed_at is not None


class NotificationPreference(models.Model):
    """Whether a user allows notifications. Disabled means every notify is a no-op."""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notification_preference'
    )
    enabled = models.BooleanField(default=True)

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Notification Preference'
        verbose_name_plural = 'Notification Preferences'

    def __str__(self):
        return f"{self.user}: {'enabled' if self.enabled else 'disabled'}"
