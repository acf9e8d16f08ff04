from rest_framework import permissions


class IsStaffRole(permissions.BasePermission):
    """
    Allows access to Faculty, Admins, SuperAdmins and RootAdmins.
    Strictly blocks Learners.
    """
    def has_permission(self, request, view):
        # 1. User must be logged in
        if not request.user or not request.user.is_authenticated:
            return False

        # 2. Check Role
        return request.user.is_superuser or not request.user.is_learner


class IsPlatformAdmin(permissions.BasePermission):
    """Only SuperAdmin / RootAdmin accounts."""
    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return request.user.is_platform_admin
