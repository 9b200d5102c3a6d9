import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client
from PIL import Image


def png(name="photo.png", size=(64, 48), color="#3b82f6"):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")


@pytest.mark.django_db
def test_upload_single_image(auth_client, media_root):
    resp = auth_client.post("/api/upload/image/", {"image": png()})
    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["filename"] == "photo.png"
    assert body["public_id"].startswith("crowdfunding-projects/")
    assert body["image_url"].startswith("/media/crowdfunding-projects/")
    assert (media_root / f"{body['public_id']}.png").exists()


@pytest.mark.django_db
def test_large_images_are_downscaled(auth_client, media_root):
    resp = auth_client.post("/api/upload/image/", {"image": png(size=(2400, 1000))})
    assert resp.status_code == 201
    with Image.open(media_root / f"{resp.json()['public_id']}.png") as stored:
        assert stored.size == (1200, 500)


@pytest.mark.django_db
def test_animated_images_are_downscaled_frame_by_frame(auth_client, media_root):
    frames = [Image.new("RGB", (1600, 900), color) for color in ("red", "blue")]
    buffer = io.BytesIO()
    frames[0].save(buffer, format="GIF", save_all=True, append_images=frames[1:], duration=120, loop=0)
    upload = SimpleUploadedFile("spinner.gif", buffer.getvalue(), content_type="image/gif")

    resp = auth_client.post("/api/upload/image/", {"image": upload})
    assert resp.status_code == 201, resp.content
    with Image.open(media_root / f"{resp.json()['public_id']}.gif") as stored:
        assert stored.size == (1200, 675)
        assert stored.n_frames == 2


@pytest.mark.django_db
def test_rejects_non_images_and_oversized_files(auth_client, settings):
    fake = SimpleUploadedFile("notes.png", b"definitely not a picture", content_type="image/png")
    resp = auth_client.post("/api/upload/image/", {"image": fake})
    assert resp.status_code == 400
    assert "only image files are allowed" in resp.json()["image"][0]

    assert auth_client.post("/api/upload/image/", {}).json() == {"image": ["No file uploaded"]}

    settings.UPLOAD_MAX_BYTES = 10
    assert auth_client.post("/api/upload/image/", {"image": png()}).status_code == 400


@pytest.mark.django_db
def test_upload_multiple_images(auth_client, settings):
    resp = auth_client.post("/api/upload/images/", {"images": [png("a.png"), png("b.png")]})
    assert resp.status_code == 201
    assert [image["filename"] for image in resp.json()["images"]] == ["a.png", "b.png"]

    too_many = [png(f"{i}.png") for i in range(settings.UPLOAD_MAX_FILES + 1)]
    assert auth_client.post("/api/upload/images/", {"images": too_many}).status_code == 400


@pytest.mark.django_db
def test_upload_requires_authentication():
    assert Client().post("/api/upload/image/", {"image": png()}).status_code == 401
