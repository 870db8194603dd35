from rest_framework import permissions

from .models import UserRole, has_role_at_least


class HasRoleAtLeast(permissions.BasePermission):
    """
    Permission: User's role must rank at or above ``required_role``.

    OPERATOR > TEACHER > STUDENT.
    """

    required_role = UserRole.STUDENT

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return has_role_at_least(user.role, self.required_role)


class IsOperator(HasRoleAtLeast):
    required_role = UserRole.OPERATOR


class IsTeacher(HasRoleAtLeast):
    """Teachers and operators."""
    required_role = UserRole.TEACHER


class IsStudent(permissions.BasePermission):
    """
    Permission: User must be a student.

    Students are the only role that applies for jobs and spends money,
    so this one is an exact match rather than a rank comparison.
    """

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role == UserRole.STUDENT)
