from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView


class MetaInfoView(APIView):
    """GET /meta/info: public instance metadata, no session required."""
    authentication_classes = []

    def get(self, request):
        meta = settings.RUNTIME_CONFIG["public"]["meta"]
        return Response({
            "name": meta["name"],
            "description": meta["description"],
            "version": meta["version"],
            "hasCaptcha": meta["captcha"] == "true",
            "captchaClientKey": meta["captchaClientKey"],
        })
