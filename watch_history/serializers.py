# watch_history/serializers.py
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional

from django.utils import timezone
from rest_framework import serializers

from .models import MEDIA_TYPES, WatchHistoryItem


def format_decimal(value: Decimal | str) -> str:
    """Plain decimal notation without trailing zeros: Decimal("100.000000") -> "100"."""
    return format(Decimal(value).normalize(), "f")


class NumberAsStringField(serializers.Field):
    """
    Accepts JSON numbers only (no strings, no booleans) and keeps them as
    decimal strings so no float rounding leaks into storage.
    Values are rounded to `decimal_places` and must fit the column's
    `max_digits`, so what is returned is exactly what gets stored.
    """
    default_error_messages = {
        "invalid": "A number is required.",
        "not_finite": "Number must be finite.",
        "max_whole_digits": "Ensure that there are no more than {max_whole_digits} digits before the decimal point.",
    }

    def __init__(self, max_digits=18, decimal_places=6, **kwargs):
        self.max_digits = max_digits
        self.decimal_places = decimal_places
        self.max_whole_digits = max_digits - decimal_places
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        if isinstance(data, float) and not math.isfinite(data):
            self.fail("not_finite")

        value = Decimal(str(data))
        # Checked before and after rounding: 999999999999.9999999 rounds up to 13 digits.
        if value.adjusted() >= self.max_whole_digits:
            self.fail("max_whole_digits", max_whole_digits=self.max_whole_digits)
        value = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=ROUND_HALF_UP)
        if value.adjusted() >= self.max_whole_digits:
            self.fail("max_whole_digits", max_whole_digits=self.max_whole_digits)
        return format_decimal(value)

    def to_representation(self, value):
        return format_decimal(value)


class StrictCharField(serializers.CharField):
    """CharField that refuses numbers instead of turning them into strings."""
    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictIntegerField(serializers.IntegerField):
    """IntegerField that only takes JSON integers (no "2019", no true)."""
    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictBooleanField(serializers.BooleanField):
    """BooleanField that only takes JSON true/false (no "yes", no 1)."""
    def to_internal_value(self, data):
        if not isinstance(data, bool):
            self.fail("invalid", input=data)
        return data


class AwareDateTimeField(serializers.DateTimeField):
    """
    Datetime field for ISO-8601 timestamps carrying an explicit offset.
    - Rejects naive input ("2022-01-01T00:00:00" without Z or +hh:mm).
    - Always outputs UTC, millisecond precision, "Z" suffix.
    """
    default_error_messages = {
        "naive": "Datetime must include a UTC offset (e.g. 'Z' or '+02:00').",
    }

    def enforce_timezone(self, value):
        if timezone.is_naive(value):
            self.fail("naive")
        return value.astimezone(dt.timezone.utc)

    def to_representation(self, value):
        if value is None:
            return None
        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt.timezone.utc)
        value = value.astimezone(dt.timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WatchHistoryMetaSerializer(serializers.Serializer):
    title = StrictCharField(allow_blank=True, trim_whitespace=False)
    year = StrictIntegerField(required=False)
    poster = StrictCharField(required=False, allow_blank=True, trim_whitespace=False)
    type = serializers.ChoiceField(choices=MEDIA_TYPES)


class WatchHistoryEntrySerializer(serializers.Serializer):
    """
    One watch-history entry as sent by the player or by an import.
    Notes:
      - duration / watched must be JSON numbers; they come out as decimal strings.
      - completed defaults to false.
      - seasonId / episodeId are ignored for movies (see services.normalize_episode_ids).
    """
    meta = WatchHistoryMetaSerializer()
    tmdbId = StrictCharField(source="tmdb_id", max_length=64)
    duration = NumberAsStringField()
    watched = NumberAsStringField()
    watchedAt = AwareDateTimeField(source="watched_at")
    completed = StrictBooleanField(default=False)
    seasonId = StrictCharField(source="season_id", required=False, max_length=64)
    episodeId = StrictCharField(source="episode_id", required=False, max_length=64)
    seasonNumber = StrictIntegerField(source="season_number", required=False,
                                      min_value=-2**31, max_value=2**31 - 1)
    episodeNumber = StrictIntegerField(source="episode_number", required=False,
                                       min_value=-2**31, max_value=2**31 - 1)


@dataclass(frozen=True)
class WatchHistoryEntry:
    meta: dict
    tmdb_id: str
    duration: str
    watched: str
    watched_at: dt.datetime
    completed: bool = False
    season_id: Optional[str] = None
    episode_id: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None

    @property
    def media_type(self) -> str:
        return self.meta["type"]


def parse_watch_history_body(data: Any) -> List[WatchHistoryEntry]:
    """
    Validate a PUT body: a single entry (normal playback) or a list of
    entries (import). Raises serializers.ValidationError on bad input.
    """
    many = isinstance(data, list)
    serializer = WatchHistoryEntrySerializer(data=data, many=many)
    serializer.is_valid(raise_exception=True)
    validated = serializer.validated_data if many else [serializer.validated_data]
    return [WatchHistoryEntry(**dict(attrs, meta=dict(attrs["meta"]))) for attrs in validated]


class WatchHistoryItemSerializer(serializers.ModelSerializer):
    """Read-only snapshot of a persisted row, camelCased for the client."""
    success = serializers.SerializerMethodField()
    tmdbId = serializers.CharField(source="tmdb_id")
    userId = serializers.CharField(source="user_id")
    seasonId = serializers.CharField(source="season_id", allow_null=True)
    episodeId = serializers.CharField(source="episode_id", allow_null=True)
    seasonNumber = serializers.IntegerField(source="season_number", allow_null=True)
    episodeNumber = serializers.IntegerField(source="episode_number", allow_null=True)
    duration = NumberAsStringField()
    watched = NumberAsStringField()
    watchedAt = AwareDateTimeField(source="watched_at")
    createdAt = AwareDateTimeField(source="created_at")
    updatedAt = AwareDateTimeField(source="updated_at")

    class Meta:
        model = WatchHistoryItem
        fields = (
            "success",
            "id",
            "tmdbId",
            "userId",
            "seasonId",
            "episodeId",
            "seasonNumber",
            "episodeNumber",
            "meta",
            "duration",
            "watched",
            "watchedAt",
            "completed",
            "createdAt",
            "updatedAt",
        )
        read_only_fields = ("id", "meta", "completed")

    def get_success(self, obj) -> bool:
        return True
