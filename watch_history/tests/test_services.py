import datetime as dt

import pytest
from django.utils import timezone

from watch_history.serializers import WatchHistoryEntry, format_decimal, parse_watch_history_body
from watch_history.services import (
    MIN_WATCHED_AT,
    MOVIE_SENTINEL,
    WatchHistoryFilter,
    clamp_watched_at,
    normalize_episode_ids,
)


def entry(media_type, season_id=None, episode_id=None):
    return WatchHistoryEntry(
        meta={"title": "t", "type": media_type},
        tmdb_id="1",
        duration="1",
        watched="1",
        watched_at=MIN_WATCHED_AT,
        season_id=season_id,
        episode_id=episode_id,
    )


def test_normalize_ids_movie_uses_sentinel():
    assert normalize_episode_ids(entry("movie", "s", "e")) == (MOVIE_SENTINEL, MOVIE_SENTINEL)


def test_normalize_ids_show_keeps_ids_or_none():
    assert normalize_episode_ids(entry("show", "s", "e")) == ("s", "e")
    assert normalize_episode_ids(entry("show")) == (None, None)


def test_clamp_watched_at(monkeypatch):
    now = dt.datetime(2025, 1, 1, tzinfo=dt.timezone.utc)
    monkeypatch.setattr(timezone, "now", lambda: now)

    inside = dt.datetime(2023, 6, 1, 8, 30, tzinfo=dt.timezone.utc)
    assert clamp_watched_at(inside) == inside
    assert clamp_watched_at(now + dt.timedelta(days=1)) == now
    assert clamp_watched_at(dt.datetime(2000, 1, 1, tzinfo=dt.timezone.utc)) == MIN_WATCHED_AT
    assert clamp_watched_at(None) == now


@pytest.mark.parametrize("value, expected", [
    ("100", "100"),
    ("100.000000", "100"),
    ("7200.000000", "7200"),
    ("50.5", "50.5"),
    ("0.000000", "0"),
])
def test_format_decimal(value, expected):
    assert format_decimal(value) == expected


def test_parse_single_body_defaults_and_coercion():
    [parsed] = parse_watch_history_body({
        "meta": {"title": "X", "type": "movie", "poster": "p.jpg"},
        "tmdbId": "1",
        "duration": 100,
        "watched": 12.25,
        "watchedAt": "2022-01-01T02:00:00+02:00",
    })
    assert parsed.duration == "100"
    assert parsed.watched == "12.25"
    assert parsed.completed is False
    assert parsed.season_id is None
    assert parsed.meta == {"title": "X", "type": "movie", "poster": "p.jpg"}
    assert parsed.watched_at == dt.datetime(2022, 1, 1, tzinfo=dt.timezone.utc)


def test_filter_from_body():
    assert WatchHistoryFilter.from_body("u", "1", None).lookup() == {"user_id": "u", "tmdb_id": "1"}
    assert WatchHistoryFilter.from_body("u", "1", ["x"]).lookup() == {"user_id": "u", "tmdb_id": "1"}
    assert WatchHistoryFilter.from_body("u", "1", {"seasonId": "s", "episodeId": "e"}).lookup() == {
        "user_id": "u",
        "tmdb_id": "1",
        "season_id": "s",
        "episode_id": "e",
    }
