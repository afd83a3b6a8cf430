"""Identity document image normalization."""

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from backoffice.errors import NotAnImage

JPEG_FORMAT = "JPEG"
DEFAULT_QUALITY = 80


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded file as received: declared content type plus raw bytes."""

    content_type: str | None
    data: bytes

    @property
    def is_empty(self) -> bool:
        return not self.data


def ensure_image_content_type(content_type: str | None) -> None:
    """Reject uploads whose declared content type is not in the image family."""
    if not content_type or not content_type.lower().startswith("image/"):
        raise NotAnImage()


def normalize_image(data: bytes, quality: int = DEFAULT_QUALITY) -> bytes:
    """Re-encode ``data`` as a baseline RGB JPEG at ``quality``.

    Metadata is dropped, so identical input bytes always give identical
    output bytes.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            rgb = img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as err:
        raise NotAnImage() from err

    buf = io.BytesIO()
    rgb.save(buf, format=JPEG_FORMAT, quality=quality)
    return buf.getvalue()
