"""
Image upload endpoints used by the campaign and project forms.

- POST /api/upload/image/   multipart field ``image`` (one file)
- POST /api/upload/images/  multipart field ``images`` (up to UPLOAD_MAX_FILES)
"""
from django.conf import settings
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from .images import store_image


class ImageUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = (MultiPartParser, FormParser)

    def post(self, request):
        upload = request.FILES.get("image")
        if not upload:
            return Response({"image": ["No file uploaded"]}, status=status.HTTP_400_BAD_REQUEST)
        return Response(store_image(upload, field="image"), status=status.HTTP_201_CREATED)


class MultipleImageUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = (MultiPartParser, FormParser)

    def post(self, request):
        uploads = request.FILES.getlist("images")
        if not uploads:
            return Response({"images": ["No files uploaded"]}, status=status.HTTP_400_BAD_REQUEST)
        if len(uploads) > settings.UPLOAD_MAX_FILES:
            return Response(
                {"images": [f"At most {settings.UPLOAD_MAX_FILES} files can be uploaded at once"]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        images = [store_image(upload, field="images") for upload in uploads]
        return Response({"images": images}, status=status.HTTP_201_CREATED)
