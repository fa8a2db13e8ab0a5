# watch_history/services.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from django.db import IntegrityError, transaction
from django.utils import timezone

from .models import WatchHistoryItem
from .serializers import WatchHistoryEntry

logger = logging.getLogger(__name__)

# Stored instead of NULL for movies so the composite unique key still applies.
MOVIE_SENTINEL = "\n"

# 13th July 2021, nothing can have been watched before this.
MIN_WATCHED_AT = dt.datetime(2021, 7, 13, tzinfo=dt.timezone.utc)


def normalize_episode_ids(entry: WatchHistoryEntry) -> Tuple[Optional[str], Optional[str]]:
    """(season_id, episode_id) as stored: the sentinel pair for movies, the given ids (or None) for shows."""
    if entry.media_type == "movie":
        return MOVIE_SENTINEL, MOVIE_SENTINEL
    return entry.season_id or None, entry.episode_id or None


def clamp_watched_at(value: dt.datetime | None) -> dt.datetime:
    """Clamp into [MIN_WATCHED_AT, now]; a missing value means now."""
    now = timezone.now()
    if value is None:
        value = now
    return max(MIN_WATCHED_AT, min(value, now))


def _upsert_one(user_id: str, tmdb_id: str, entry: WatchHistoryEntry) -> WatchHistoryItem:
    season_id, episode_id = normalize_episode_ids(entry)
    key = {
        "tmdb_id": tmdb_id,
        "user_id": user_id,
        "season_id": season_id,
        "episode_id": episode_id,
    }
    data = {
        "duration": Decimal(entry.duration),
        "watched": Decimal(entry.watched),
        "watched_at": clamp_watched_at(entry.watched_at),
        "completed": entry.completed,
        "meta": entry.meta,
    }

    item = WatchHistoryItem.objects.filter(**key).first()
    if item is None:
        try:
            with transaction.atomic():
                return WatchHistoryItem.objects.create(
                    season_number=entry.season_number,
                    episode_number=entry.episode_number,
                    **key,
                    **data,
                )
        except IntegrityError:
            # Lost an insert race on the composite key: update the winner instead.
            item = WatchHistoryItem.objects.get(**key)

    for name, value in data.items():
        setattr(item, name, value)
    item.save(update_fields=[*data, "updated_at"])
    return item


def upsert_watch_history(user_id: str, tmdb_id: str, entries: List[WatchHistoryEntry]) -> List[WatchHistoryItem]:
    """
    Insert or update each entry, in order, inside one transaction.

    Rules:
      1) A single entry is stored under the tmdb id from the URL; in a batch
         each entry uses its own tmdbId.
      2) Existing rows keep their id, season_number and episode_number.
      3) Any database error aborts and rolls back the whole batch.
    """
    items: List[WatchHistoryItem] = []
    with transaction.atomic():
        for entry in entries:
            item_tmdb_id = tmdb_id if len(entries) == 1 else (entry.tmdb_id or tmdb_id)
            items.append(_upsert_one(user_id, item_tmdb_id, entry))
    logger.info("Saved %d watch history item(s) for user %s", len(items), user_id)
    return items


@dataclass(frozen=True)
class WatchHistoryFilter:
    user_id: str
    tmdb_id: str
    season_id: Optional[str] = None
    episode_id: Optional[str] = None

    @classmethod
    def from_body(cls, user_id: str, tmdb_id: str, body: Any) -> "WatchHistoryFilter":
        """Build from a DELETE body; anything that is not a dict of non-empty string ids is ignored."""
        if not isinstance(body, dict):
            body = {}

        def _id(name: str) -> Optional[str]:
            value = body.get(name)
            return value if isinstance(value, str) and value else None

        return cls(user_id=user_id, tmdb_id=tmdb_id,
                   season_id=_id("seasonId"), episode_id=_id("episodeId"))

    def lookup(self) -> Dict[str, str]:
        where = {"user_id": self.user_id, "tmdb_id": self.tmdb_id}
        if self.season_id is not None:
            where["season_id"] = self.season_id
        if self.episode_id is not None:
            where["episode_id"] = self.episode_id
        return where


def delete_watch_history(where: WatchHistoryFilter) -> int:
    """Delete every row matching the filter; returns how many were removed."""
    deleted, _ = WatchHistoryItem.objects.filter(**where.lookup()).delete()
    logger.info("Deleted %d watch history item(s) for user %s, tmdb %s", deleted, where.user_id, where.tmdb_id)
    return deleted
