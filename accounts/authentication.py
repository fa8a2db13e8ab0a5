from dataclasses import dataclass

from rest_framework.authentication import BaseAuthentication

from .sessions import get_current_session


@dataclass(frozen=True)
class SessionUser:
    id: str
    is_authenticated: bool = True


class SessionTokenAuthentication(BaseAuthentication):
    """Bearer-token auth; sets request.user to the session owner and request.auth to the Session."""
    def authenticate(self, request):
        session = get_current_session(request)
        if session is None:
            return None
        return SessionUser(id=session.user_id), session

    def authenticate_header(self, request):
        return "Bearer"
