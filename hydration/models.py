from django.conf import settings
from django.db import models
from django.utils import timezone


class HydrationLog(models.Model):
    """
    A single drink logged by a user, with the daily goal in force at the time.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='hydration_logs'
    )
    amount = models.PositiveIntegerField(
        help_text="Amount in ml"
    )
    goal = models.PositiveIntegerField(
        default=2000,
        help_text="Daily goal in ml"
    )
    timestamp = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='hydration_user_ts_idx'),
        ]
        verbose_name = 'Hydration Log'
        verbose_name_plural = 'Hydration Logs'

    def __str__(self):
        return f"{self.amount}ml at {self.timestamp.strftime('%Y-%m-%d %H:%M')}"
