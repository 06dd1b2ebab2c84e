from django.contrib import admin
from .models import HydrationLog


@admin.register(HydrationLog)
class HydrationLogAdmin(admin.ModelAdmin):
    list_display = ['timestamp', 'amount', 'goal', 'user', 'created_at']
    search_fields = ['user__username']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'timestamp'

    fieldsets = (
        ('Hydration Data', {
            'fields': ('user', 'timestamp', 'amount', 'goal')
        }),
        ('Audit Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
