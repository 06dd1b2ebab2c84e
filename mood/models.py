from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class MoodLog(models.Model):
    """
    A mood and energy check-in.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='mood_logs'
    )
    mood = models.CharField(
        max_length=32,
        help_text="Emoji or label (e.g., '😀', 'neutral')"
    )
    energy = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Energy level on a 1-5 scale"
    )
    timestamp = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )
    notes = models.CharField(
        max_length=200,
        blank=True,
        default=''
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='mood_user_ts_idx'),
        ]
        verbose_name = 'Mood Log'
        verbose_name_plural = 'Mood Logs'

    def __str__(self):
        return f"{self.mood} (energy {self.energy}) at {self.timestamp.strftime('%Y-%m-%d %H:%M')}"
