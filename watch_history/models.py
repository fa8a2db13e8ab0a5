import uuid

from django.db import models

MEDIA_TYPES = (("movie", "Movie"), ("show", "Show"))


class WatchHistoryItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64, db_index=True)          # Owner
    tmdb_id = models.CharField(max_length=64)                         # TMDB id of the movie/show
    season_id = models.CharField(max_length=64, null=True, blank=True)    # "\n" for movies
    episode_id = models.CharField(max_length=64, null=True, blank=True)   # "\n" for movies
    season_number = models.IntegerField(null=True, blank=True)
    episode_number = models.IntegerField(null=True, blank=True)
    meta = models.JSONField()                                         # {title, year?, poster?, type}
    duration = models.DecimalField(max_digits=18, decimal_places=6)   # Seconds
    watched = models.DecimalField(max_digits=18, decimal_places=6)    # Seconds
    watched_at = models.DateTimeField()
    completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "watch_history"
        constraints = [
            models.UniqueConstraint(fields=["tmdb_id", "user_id", "season_id", "episode_id"],
                                    name="uq_watch_history_item"),
        ]
        indexes = [
            models.Index(fields=["user_id", "watched_at"], name="idx_watch_history_user_at"),
        ]

    def __str__(self):
        return f"{self.user_id}->{self.tmdb_id} s={self.season_id!r} e={self.episode_id!r}"
