"""API permissions.

Every endpoint requires an authenticated user (see
``REST_FRAMEWORK["DEFAULT_PERMISSION_CLASSES"]``); writes are further
restricted to staff unless a view opts out for a specific action.
"""

from __future__ import annotations

from rest_framework.permissions import SAFE_METHODS, BasePermission
from rest_framework.request import Request
from rest_framework.views import APIView


class IsStaffOrReadOnly(BasePermission):
    """Authenticated users may read; only staff may write.

    Actions listed in the view's ``open_write_actions`` are writable by
    any authenticated user.
    """

    message = "Only staff users can modify this resource."

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        if getattr(view, "action", None) in getattr(view, "open_write_actions", ()):
            return True
        return bool(request.user.is_staff)
