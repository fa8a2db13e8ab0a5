import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="WatchHistoryItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(db_index=True, max_length=64)),
                ("tmdb_id", models.CharField(max_length=64)),
                ("season_id", models.CharField(blank=True, max_length=64, null=True)),
                ("episode_id", models.CharField(blank=True, max_length=64, null=True)),
                ("season_number", models.IntegerField(blank=True, null=True)),
                ("episode_number", models.IntegerField(blank=True, null=True)),
                ("meta", models.JSONField()),
                ("duration", models.DecimalField(decimal_places=6, max_digits=18)),
                ("watched", models.DecimalField(decimal_places=6, max_digits=18)),
                ("watched_at", models.DateTimeField()),
                ("completed", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "watch_history",
            },
        ),
        migrations.AddConstraint(
            model_name="watchhistoryitem",
            constraint=models.UniqueConstraint(
                fields=("tmdb_id", "user_id", "season_id", "episode_id"),
                name="uq_watch_history_item",
            ),
        ),
        migrations.AddIndex(
            model_name="watchhistoryitem",
            index=models.Index(fields=["user_id", "watched_at"], name="idx_watch_history_user_at"),
        ),
    ]
