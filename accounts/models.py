import uuid

from django.db import models
from django.utils import timezone


class Session(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64, db_index=True)         # Owner of the session
    created_at = models.DateTimeField(auto_now_add=True)
    accessed_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(db_index=True)
    device = models.CharField(max_length=500, blank=True, default="")
    user_agent = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "sessions"

    def is_expired(self, now=None) -> bool:
        return self.expires_at <= (now or timezone.now())
