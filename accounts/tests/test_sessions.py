import datetime as dt

import pytest
from django.core import signing
from django.utils import timezone
from rest_framework.test import APIRequestFactory

from accounts.sessions import create_session, get_current_session, make_session_token, read_session_token


def request_with(header=None):
    extra = {"HTTP_AUTHORIZATION": header} if header is not None else {}
    return APIRequestFactory().get("/", **extra)


@pytest.mark.django_db
def test_create_session_sets_lifetime(settings):
    session = create_session("u-1", device="tv", user_agent="ua")
    assert session.user_id == "u-1"
    assert session.expires_at - session.accessed_at == settings.SESSION_LIFETIME
    assert not session.is_expired()


@pytest.mark.django_db
def test_token_round_trip_resolves_session():
    session = create_session("u-1")
    token = make_session_token(session)
    assert read_session_token(token) == str(session.id)
    assert get_current_session(request_with(f"Bearer {token}")) == session


def test_tampered_or_foreign_tokens_are_rejected():
    assert read_session_token("garbage") is None
    foreign = signing.dumps({"sid": "x"}, key="someone-else", salt="accounts.session")
    assert read_session_token(foreign) is None


@pytest.mark.django_db
@pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer nope"])
def test_missing_or_bad_header_has_no_session(header):
    assert get_current_session(request_with(header)) is None


@pytest.mark.django_db
def test_token_for_unknown_or_malformed_session_id(settings):
    key = settings.RUNTIME_CONFIG["cryptoSecret"]
    bogus = signing.dumps({"sid": "not-a-uuid"}, key=key, salt="accounts.session")
    unknown = signing.dumps({"sid": "00000000-0000-0000-0000-000000000000"}, key=key, salt="accounts.session")
    assert get_current_session(request_with(f"Bearer {unknown}")) is None
    assert get_current_session(request_with(f"Bearer {bogus}")) is None


@pytest.mark.django_db
def test_expired_session_is_not_current():
    session = create_session("u-1")
    session.expires_at = timezone.now() - dt.timedelta(minutes=1)
    session.save()
    assert get_current_session(request_with(f"Bearer {make_session_token(session)}")) is None
