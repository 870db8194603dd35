from django.contrib import admin

from .models import Job, JobAssignment


class JobAssignmentInline(admin.TabularInline):
    model = JobAssignment
    extra = 0
    fields = ['student', 'status', 'created_at', 'completed_at']
    readonly_fields = ['created_at', 'completed_at']


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    """
    Rewards are fixed once a job exists; status changes go through the API
    so payouts always reach the ledger.
    """

    list_display = [
        'title', 'subject', 'teacher', 'xp_reward', 'money_reward',
        'max_students', 'status', 'created_at',
    ]
    list_filter = ['status', 'subject', 'created_at']
    search_fields = ['title', 'description', 'teacher__email', 'teacher__display_name']
    readonly_fields = ['status', 'created_at', 'updated_at', 'closed_at']
    inlines = [JobAssignmentInline]
    date_hierarchy = 'created_at'

    def get_readonly_fields(self, request, obj=None):
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            fields += ['xp_reward', 'money_reward']
            if obj.is_closed:
                fields.append('max_students')
        return fields

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('subject', 'teacher')


@admin.register(JobAssignment)
class JobAssignmentAdmin(admin.ModelAdmin):
    list_display = ['job', 'student', 'status', 'created_at', 'completed_at']
    list_filter = ['status']
    search_fields = ['job__title', 'student__email', 'student__display_name']
    readonly_fields = ['created_at', 'updated_at', 'completed_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('job', 'student')
