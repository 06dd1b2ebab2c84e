from django.contrib import admin
from .models import FastingSession
from .services.formatting import format_duration


@admin.register(FastingSession)
class FastingSessionAdmin(admin.ModelAdmin):
    list_display = [
        'start_time',
        'end_time',
        'duration_display',
        'goal_hours',
        'goal_reached',
        'is_active',
        'user'
    ]
    list_filter = ['is_active', 'goal_reached']
    search_fields = ['user__username', 'notes']
    date_hierarchy = 'start_time'
    # duration and goal_reached are fixed when the fast is stopped
    readonly_fields = ['created_at', 'updated_at', 'duration', 'goal_reached', 'duration_display']

    fieldsets = (
        ('Fasting Details', {
            'fields': ('user', 'start_time', 'end_time', 'goal_hours', 'is_active', 'notes')
        }),
        ('Calculated Fields', {
            'fields': ('duration', 'duration_display', 'goal_reached'),
            'classes': ('collapse',)
        }),
        ('Audit Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def duration_display(self, obj):
        """Display duration in human-readable format"""
        if obj.is_active:
            return "-"
        return format_duration(obj.duration)
    duration_display.short_description = 'Duration'
