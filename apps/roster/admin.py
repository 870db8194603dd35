from django.contrib import admin

from .models import Enrollment, ExternalRef, SchoolClass, Subject


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0
    fields = ['user', 'school_class', 'created_at']
    readonly_fields = ['created_at']


@admin.register(SchoolClass)
class SchoolClassAdmin(admin.ModelAdmin):
    list_display = ['name', 'grade', 'created_at']
    list_filter = ['grade']
    search_fields = ['name']
    ordering = ['grade', 'name']


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'created_at']
    search_fields = ['name', 'code']
    inlines = [EnrollmentInline]


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ['user', 'subject', 'school_class', 'created_at']
    list_filter = ['subject', 'school_class']
    search_fields = ['user__email', 'user__display_name', 'subject__code']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'subject', 'school_class')


@admin.register(ExternalRef)
class ExternalRefAdmin(admin.ModelAdmin):
    """Sync mappings are maintained by the roster sync only."""

    list_display = ['type', 'external_id', 'internal_id', 'updated_at']
    list_filter = ['type']
    search_fields = ['external_id', 'internal_id']
    readonly_fields = ['type', 'external_id', 'internal_id', 'metadata', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False
