from rest_framework.permissions import BasePermission

from .exceptions import OtherUserForbidden, SessionNotFound


class IsPathUser(BasePermission):
    """Only the owner of the `user_id` in the URL may touch that user's resources."""
    def has_permission(self, request, view):
        session = request.auth
        if session is None:
            raise SessionNotFound()
        if session.user_id != view.kwargs.get("user_id"):
            raise OtherUserForbidden()
        return True
