from django.conf import settings
from django.shortcuts import redirect
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


def index(request):
    # The API has no landing page of its own; send browsers to the SPA
    return redirect(settings.FRONTEND_URL)


@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([])
def health(request):
    return Response({"status": "OK", "message": "Server is running"})
