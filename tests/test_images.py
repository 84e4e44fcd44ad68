"""Tests for image normalization and hashing."""

import io

import pytest
from PIL import Image

from meal_coach.domain.errors import UnsupportedImageFormatError
from meal_coach.services.images import ImageNormalizer, content_hash, to_data_url
from tests.conftest import make_image


def test_validate_accepts_supported_formats() -> None:
    normalizer = ImageNormalizer()

    assert normalizer.validate(make_image(image_format="JPEG"))
    assert normalizer.validate(make_image(image_format="PNG"))
    assert normalizer.validate(make_image(image_format="WEBP"))


def test_validate_rejects_other_formats_and_garbage() -> None:
    normalizer = ImageNormalizer()

    assert not normalizer.validate(make_image(image_format="GIF"))
    assert not normalizer.validate(b"definitely not an image")
    assert not normalizer.validate(b"")


def test_normalize_rejects_unsupported_bytes() -> None:
    with pytest.raises(UnsupportedImageFormatError):
        ImageNormalizer().normalize(b"not an image")


def _truncated_jpeg() -> bytes:
    raw = make_image(size=(400, 300), image_format="JPEG")
    return raw[: len(raw) // 2]


def test_truncated_jpeg_is_rejected() -> None:
    normalizer = ImageNormalizer()

    assert not normalizer.validate(_truncated_jpeg())
    with pytest.raises(UnsupportedImageFormatError):
        normalizer.normalize(_truncated_jpeg())


def test_decode_failure_during_normalize_is_unsupported(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(ImageNormalizer, "validate", lambda self, raw: True)

    with pytest.raises(UnsupportedImageFormatError):
        ImageNormalizer().normalize(_truncated_jpeg())


def test_normalize_fits_bounding_box_and_keeps_aspect_ratio() -> None:
    normalized = ImageNormalizer().normalize(make_image(size=(2048, 1024)))

    assert (normalized.width, normalized.height) == (1024, 512)
    with Image.open(io.BytesIO(normalized.buffer)) as image:
        assert image.format == "JPEG"
        assert image.size == (1024, 512)


def test_normalize_never_upscales() -> None:
    normalized = ImageNormalizer().normalize(make_image(size=(300, 200)))

    assert (normalized.width, normalized.height) == (300, 200)


def test_normalize_describes_buffer() -> None:
    normalized = ImageNormalizer().normalize(make_image())

    assert normalized.size == len(normalized.buffer)
    assert normalized.hash == content_hash(normalized.buffer)
    assert len(normalized.hash) == 64
    assert normalized.format == "jpeg"


def test_same_pixels_in_different_containers_hash_equally() -> None:
    normalizer = ImageNormalizer()

    png = normalizer.normalize(make_image(image_format="PNG"))
    webp = normalizer.normalize(make_image(image_format="WEBP", lossless=True))

    assert png.hash == webp.hash


def test_hash_ignores_container_metadata() -> None:
    normalizer = ImageNormalizer()

    plain = normalizer.normalize(make_image(image_format="PNG"))
    with_dpi = normalizer.normalize(make_image(image_format="PNG", dpi=(300, 300)))

    assert plain.hash == with_dpi.hash


def test_different_pictures_hash_differently() -> None:
    normalizer = ImageNormalizer()

    first = normalizer.normalize(make_image(color=(200, 120, 40)))
    second = normalizer.normalize(make_image(color=(10, 10, 200)))

    assert first.hash != second.hash


def test_transparent_png_is_flattened() -> None:
    image = Image.new("RGBA", (40, 40), (255, 0, 0, 0))
    output = io.BytesIO()
    image.save(output, format="PNG")

    normalized = ImageNormalizer().normalize(output.getvalue())

    with Image.open(io.BytesIO(normalized.buffer)) as result:
        assert result.mode == "RGB"
        red, green, blue = result.getpixel((20, 20))
        assert min(red, green, blue) > 240


def test_to_data_url_uses_format_header() -> None:
    assert to_data_url(b"fake").startswith("data:image/jpeg;base64,")
    assert to_data_url(b"fake", "png") == "data:image/png;base64,ZmFrZQ=="
