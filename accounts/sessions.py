# accounts/sessions.py
from __future__ import annotations

import uuid

from django.conf import settings
from django.core import signing
from django.utils import timezone

from .models import Session

SESSION_TOKEN_SALT = "accounts.session"


def _token_key() -> str:
    return settings.RUNTIME_CONFIG["cryptoSecret"]


def create_session(user_id: str, device: str = "", user_agent: str = "") -> Session:
    """Open a new session for user_id, valid for SESSION_LIFETIME."""
    now = timezone.now()
    return Session.objects.create(
        user_id=user_id,
        accessed_at=now,
        expires_at=now + settings.SESSION_LIFETIME,
        device=device,
        user_agent=user_agent,
    )


def make_session_token(session: Session) -> str:
    return signing.dumps({"sid": str(session.id)}, key=_token_key(), salt=SESSION_TOKEN_SALT)


def read_session_token(token: str) -> str | None:
    """Return the session id carried by a token, or None if it was not signed by us."""
    try:
        payload = signing.loads(token, key=_token_key(), salt=SESSION_TOKEN_SALT)
    except signing.BadSignature:
        return None
    if not isinstance(payload, dict):
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None


def _bearer_token(request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_session(request) -> Session | None:
    """
    Resolve the session behind the request's bearer token.
    Returns None when the header is missing, the token is forged or
    malformed, or the session is unknown or expired.
    """
    token = _bearer_token(request)
    if token is None:
        return None
    sid = read_session_token(token)
    if sid is None:
        return None
    try:
        sid = uuid.UUID(sid)
    except ValueError:
        return None

    session = Session.objects.filter(pk=sid).first()
    if session is None or session.is_expired():
        return None
    return session
