from django.contrib import admin
from django.utils.html import format_html

from .models import LogLevel, SystemLog


@admin.register(SystemLog)
class SystemLogAdmin(admin.ModelAdmin):
    """Read-only view of the audit trail."""

    list_display = ['created_at', 'level_badge', 'message', 'user', 'request_id']
    list_filter = ['level', 'created_at']
    search_fields = ['message', 'request_id', 'user__email']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    readonly_fields = ['id', 'level', 'message', 'user', 'request_id', 'metadata', 'created_at']

    def level_badge(self, obj):
        colors = {
            LogLevel.DEBUG: ('#ccc', '#666'),
            LogLevel.INFO: ('#6B8E5E', 'white'),
            LogLevel.WARN: ('#E5C49A', '#2C1810'),
            LogLevel.ERROR: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.level, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.level
        )
    level_badge.short_description = 'Level'
    level_badge.admin_order_field = 'level'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user')
