from django.conf import settings
from django.db import models
from django.db.models import Q


class FastingSession(models.Model):
    """
    One start-to-stop fasting window for a user.

    While active, end_time is empty and duration is 0. Stopping the fast sets
    end_time, duration (seconds) and goal_reached once; they are never
    changed afterwards.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='fasting_sessions'
    )
    start_time = models.DateTimeField(
        help_text="Fasting start time"
    )
    end_time = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Fasting end time (empty while the fast is active)"
    )
    duration = models.PositiveIntegerField(
        default=0,
        help_text="Duration in seconds, set when the fast is stopped"
    )
    goal_hours = models.FloatField(
        default=16,
        help_text="Target duration in hours"
    )
    goal_reached = models.BooleanField(
        default=False,
        help_text="Whether duration reached goal_hours when the fast was stopped"
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True
    )
    notes = models.CharField(
        max_length=500,
        blank=True,
        default=''
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-start_time']
        indexes = [
            models.Index(fields=['user', 'is_active'], name='fasting_user_active_idx'),
            models.Index(fields=['user', '-start_time'], name='fasting_user_start_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user'],
                condition=Q(is_active=True),
                name='one_active_fast_per_user',
            ),
        ]
        verbose_name = 'Fasting Session'
        verbose_name_plural = 'Fasting Sessions'

    def __str__(self):
        state = 'active' if self.is_active else f"{self.duration_hours:.1f}h"
        return f"{self.user} fast on {self.start_time.strftime('%Y-%m-%d %H:%M')} ({state})"

    @property
    def duration_hours(self):
        return self.duration / 3600

    @property
    def goal_seconds(self):
        return self.goal_hours * 3600
