# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for school users.

    Provides:
    - User listing with role and class
    - Filtering by role, class and status
    - Bulk role changes and activation
    """

    list_display = [
        'email',
        'display_name',
        'role_badge',
        'school_class',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'school_class',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
        'bakalari_id',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('School', {
            'fields': ('role', 'school_class', 'bakalari_id'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        colors = {
            UserRole.OPERATOR: '#B85C5C',
            UserRole.TEACHER: '#A47449',
            UserRole.STUDENT: '#6B8E5E',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.role, '#ccc'), obj.get_role_display()
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = [
        'activate_users',
        'deactivate_users',
        'make_teachers',
        'make_students',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Set role: Teacher')
    def make_teachers(self, request, queryset):
        count = queryset.exclude(role=UserRole.OPERATOR).update(role=UserRole.TEACHER)
        self.message_user(request, f'Updated {count} user(s) to Teacher.')

    @admin.action(description='Set role: Student')
    def make_students(self, request, queryset):
        count = queryset.exclude(role=UserRole.OPERATOR).update(role=UserRole.STUDENT)
        self.message_user(request, f'Updated {count} user(s) to Student.')

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('school_class')
