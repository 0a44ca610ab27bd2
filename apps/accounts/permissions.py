"""
Role based permission classes shared by the API apps.
"""
from rest_framework.permissions import BasePermission

from .context import RequestContext


class IsPlatformAdmin(BasePermission):
    """
    Permission: caller must hold the platform administrator role.

    Usage:
        @permission_classes([IsAuthenticated, IsPlatformAdmin])
        def admin_stats(request):
            ...
    """

    message = 'Admin access required.'

    def has_permission(self, request, view):
        return RequestContext.from_request(request).is_admin

