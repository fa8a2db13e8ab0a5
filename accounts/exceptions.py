from rest_framework import exceptions, status


class SessionNotFound(exceptions.NotAuthenticated):
    default_detail = "Session not found or expired"
    default_code = "session_not_found"


class OtherUserForbidden(exceptions.PermissionDenied):
    default_detail = "Cannot access other user information"
    default_code = "other_user"


class PersistenceFailure(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to save watch history"
    default_code = "persistence_failure"
