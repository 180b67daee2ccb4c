import asyncio
from unittest.mock import MagicMock

import pytest

from estate.client.errors import ImageCountError, UploadError
from estate.client.uploader import ImageFile, ImageUploader
from estate.config import Settings


def _settings(**overrides):
    values = {
        "SECRET_KEY": "k",
        "S3_BUCKET_NAME": "estate-images",
        "S3_PUBLIC_URL": "https://cdn.estate.io",
    }
    values.update(overrides)
    return Settings(**values)


def _fake_upload(fileobj, bucket, key, ExtraArgs=None, Callback=None, Config=None):
    data = fileobj.read()
    half = len(data) // 2
    Callback(half)
    Callback(len(data) - half)


@pytest.fixture
def s3():
    client = MagicMock()
    client.upload_fileobj.side_effect = _fake_upload
    return client


@pytest.fixture
def uploader(s3):
    return ImageUploader(settings=_settings(), s3_client=s3)


def _images(count, size=1024):
    return [ImageFile(name=f"room{i}.jpg", content=b"x" * size) for i in range(count)]


@pytest.mark.parametrize(
    "count, existing",
    [(7, 0), (3, 4), (0, 0), (1, 6)],
)
def test_batch_size_is_checked_before_uploading(uploader, s3, count, existing):
    with pytest.raises(ImageCountError, match="You can only upload 6 images per listing"):
        asyncio.run(uploader.upload_images(_images(count), existing_count=existing))

    s3.upload_fileobj.assert_not_called()


def test_upload_returns_urls_in_order_with_progress(uploader, s3):
    events = []

    urls = asyncio.run(
        uploader.upload_images(_images(3), existing_count=2, on_progress=lambda f, p: events.append((f, p)))
    )

    assert len(urls) == 3
    for i, url in enumerate(urls):
        assert url.startswith("https://cdn.estate.io/")
        assert url.endswith(f"room{i}.jpg")
    assert s3.upload_fileobj.call_count == 3

    _, bucket, key = s3.upload_fileobj.call_args.args
    kwargs = s3.upload_fileobj.call_args.kwargs
    assert bucket == "estate-images"
    assert key[: -len("roomX.jpg")].isdigit()
    assert kwargs["ExtraArgs"] == {"ContentType": "image/jpeg"}

    for name in ("room0.jpg", "room1.jpg", "room2.jpg"):
        percents = [p for f, p in events if f == name]
        assert percents == [50.0, 100.0]


def test_one_failure_fails_the_batch(uploader, s3):
    def flaky(fileobj, bucket, key, **kwargs):
        if key.endswith("room1.jpg"):
            raise RuntimeError("connection reset")
        _fake_upload(fileobj, bucket, key, **kwargs)

    s3.upload_fileobj.side_effect = flaky

    with pytest.raises(UploadError) as exc_info:
        asyncio.run(uploader.upload_images(_images(3)))

    assert str(exc_info.value) == "Image upload failed (2 MB max per image)"


def test_oversized_image_fails_the_batch(uploader, s3):
    files = _images(1) + [ImageFile(name="huge.png", content=b"x" * (2 * 1024 * 1024 + 1))]

    with pytest.raises(UploadError):
        asyncio.run(uploader.upload_images(files))


def test_non_image_fails_the_batch(uploader):
    with pytest.raises(UploadError):
        asyncio.run(uploader.upload_images([ImageFile(name="notes.txt", content=b"hello")]))


def test_public_url_fallbacks(s3):
    minio = ImageUploader(
        settings=_settings(S3_PUBLIC_URL=None, S3_ENDPOINT_URL="http://localhost:9000/"),
        s3_client=s3,
    )
    aws = ImageUploader(settings=_settings(S3_PUBLIC_URL=None, AWS_REGION="eu-west-1"), s3_client=s3)

    assert minio.public_url("1 a.jpg") == "http://localhost:9000/estate-images/1%20a.jpg"
    assert aws.public_url("1.jpg") == "https://estate-images.s3.eu-west-1.amazonaws.com/1.jpg"


def test_image_file_from_path(tmp_path):
    path = tmp_path / "kitchen.webp"
    path.write_bytes(b"abc")

    image = ImageFile.from_path(path)

    assert image.name == "kitchen.webp"
    assert image.size == 3
