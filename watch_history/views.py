# watch_history/views.py
from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.exceptions import PersistenceFailure
from accounts.permissions import IsPathUser

from .serializers import WatchHistoryItemSerializer, parse_watch_history_body
from .services import WatchHistoryFilter, delete_watch_history, upsert_watch_history

logger = logging.getLogger(__name__)


class WatchHistoryView(APIView):
    """
    PUT    /users/{user_id}/watch-history/{tmdb_id}  (single item or list import)
    DELETE /users/{user_id}/watch-history/{tmdb_id}  (optional {seasonId, episodeId} body)
    Session owner must match user_id; anything else is 401/403 before 405.
    """
    permission_classes = [IsPathUser]
    http_method_names = ["put", "delete", "options"]

    def put(self, request, user_id: str, tmdb_id: str):
        entries = parse_watch_history_body(request.data)

        try:
            items = upsert_watch_history(user_id, tmdb_id, entries)
        except DatabaseError:
            logger.exception("Database error while saving watch history for user %s", user_id)
            raise PersistenceFailure()

        results = WatchHistoryItemSerializer(items, many=True).data
        if len(results) == 1:
            return Response(results[0], status=status.HTTP_200_OK)
        return Response({
            "success": True,
            "count": len(results),
            "items": results,
        }, status=status.HTTP_200_OK)

    def delete(self, request, user_id: str, tmdb_id: str):
        # The body is optional; a missing or unparsable one means "no extra filters".
        try:
            body = request.data
        except (ParseError, UnsupportedMediaType):
            body = {}
        where = WatchHistoryFilter.from_body(user_id, tmdb_id, body)

        try:
            count = delete_watch_history(where)
        except DatabaseError:
            logger.exception("Database error while deleting watch history for user %s", user_id)
            raise PersistenceFailure("Failed to delete watch history")

        return Response({
            "success": True,
            "count": count,
            "tmdbId": tmdb_id,
            "episodeId": where.episode_id,
            "seasonId": where.season_id,
        }, status=status.HTTP_200_OK)
