from django.urls import path

from .views import ImageUploadView, MultipleImageUploadView

urlpatterns = [
    path("image/", ImageUploadView.as_view(), name="upload-image"),
    path("images/", MultipleImageUploadView.as_view(), name="upload-images"),
]
