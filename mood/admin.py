from django.contrib import admin
from .models import MoodLog


@admin.register(MoodLog)
class MoodLogAdmin(admin.ModelAdmin):
    list_display = ['timestamp', 'mood', 'energy', 'user', 'notes']
    list_filter = ['energy']
    search_fields = ['user__username', 'notes']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'timestamp'
