"""Image validation, normalization and content hashing."""

import base64
import hashlib
import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps

from meal_coach.domain.errors import UnsupportedImageFormatError

SUPPORTED_FORMATS = frozenset({"JPEG", "PNG", "WEBP"})

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedImage:
    """Canonical JPEG rendition of an uploaded photo."""

    buffer: bytes
    hash: str
    size: int
    width: int
    height: int
    format: str = "jpeg"


@dataclass
class ImageNormalizer:
    """Resize and re-encode photos so equal pictures hash equally."""

    max_dimension: int = 1024
    jpeg_quality: int = 85

    def validate(self, raw: bytes) -> bool:
        """Return True when the bytes decode as JPEG, PNG or WEBP."""
        image_format = _decoded_format(raw)
        if image_format not in SUPPORTED_FORMATS:
            _logger.warning("Unsupported image format: %s", image_format)
            return False
        return True

    def normalize(self, raw: bytes) -> NormalizedImage:
        """Fit the image into the bounding box and re-encode it as JPEG."""
        if not self.validate(raw):
            raise UnsupportedImageFormatError("Image is not a JPEG, PNG or WEBP file")

        try:
            with Image.open(io.BytesIO(raw)) as source:
                image = ImageOps.exif_transpose(source)
                image = _to_rgb(image)
                # thumbnail() keeps the aspect ratio and never enlarges.
                image.thumbnail(
                    (self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS
                )
                output = io.BytesIO()
                image.save(output, format="JPEG", quality=self.jpeg_quality)
        except (OSError, ValueError) as exc:
            raise UnsupportedImageFormatError(f"Image could not be decoded: {exc}") from exc

        buffer = output.getvalue()
        normalized = NormalizedImage(
            buffer=buffer,
            hash=content_hash(buffer),
            size=len(buffer),
            width=image.width,
            height=image.height,
        )
        _logger.info(
            "Image normalized: original=%s normalized=%s hash=%s",
            len(raw),
            normalized.size,
            normalized.hash,
        )
        return normalized


def content_hash(buffer: bytes) -> str:
    """SHA-256 hex digest used as the dedup/cache key."""
    return hashlib.sha256(buffer).hexdigest()


def to_data_url(buffer: bytes, image_format: str = "jpeg") -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(buffer).decode("utf-8")
    return f"data:image/{image_format};base64,{encoded}"


def _decoded_format(raw: bytes) -> str | None:
    """Verify the stream and decode the pixels; None when unreadable."""
    try:
        with Image.open(io.BytesIO(raw)) as image:
            image_format = image.format
            image.verify()
        # verify() leaves the image unusable and skips JPEG pixel data.
        with Image.open(io.BytesIO(raw)) as image:
            image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return None
    return image_format


def _to_rgb(image: Image.Image) -> Image.Image:
    """Flatten transparency onto white and drop other color modes."""
    if image.mode in ("RGBA", "LA") or (
        image.mode == "P" and "transparency" in image.info
    ):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image
