from django.contrib import admin

from .models import TeacherDailyBudget, XPAudit


@admin.register(XPAudit)
class XPAuditAdmin(admin.ModelAdmin):
    """XP grants are an append-only ledger; the admin only reads them."""

    list_display = ['user', 'amount', 'reason', 'request_id', 'created_at']
    list_filter = ['created_at']
    search_fields = ['user__email', 'user__display_name', 'reason', 'request_id']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user')


@admin.register(TeacherDailyBudget)
class TeacherDailyBudgetAdmin(admin.ModelAdmin):
    list_display = ['teacher', 'subject', 'date', 'used', 'budget']
    list_filter = ['date', 'subject']
    search_fields = ['teacher__email', 'teacher__display_name', 'subject__code']
    readonly_fields = ['used', 'created_at', 'updated_at']
    date_hierarchy = 'date'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('teacher', 'subject')
