from django.contrib import admin
from .models import Notification, NotificationPreference


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'tag', 'created_at', 'dismissed_at']
    list_filter = ['tag']
    search_fields = ['title', 'body', 'user__username']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    list_display = ['user', 'enabled', 'updated_at']
    list_filter = ['enabled']
    readonly_fields = ['created_at', 'updated_at']
