"""Image helpers: validation, data URIs and frame encoding."""
import base64
import binascii
import logging
import re
from io import BytesIO
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from ...exceptions import ValidationFailure

logger = logging.getLogger(__name__)

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+/-]+)?(?P<params>(;[\w=.+-]+)*?);base64,(?P<data>.*)$", re.DOTALL)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/bmp": "bmp",
}


def sniff_image(data: bytes) -> str:
    """
    Confirm data decodes as an image and return its content type.

    Raises:
        ValidationFailure: If the bytes are not a readable image
    """
    if not data:
        raise ValidationFailure("Empty image")
    try:
        with Image.open(BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except Image.DecompressionBombError as e:
        raise ValidationFailure("Image dimensions are too large", too_large=True) from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationFailure("Please select a valid image file") from e
    return Image.MIME.get(image_format or "", "image/jpeg")


def validate_image(data: bytes, max_bytes: int) -> str:
    """Size check first, then format sniffing; returns the content type."""
    if len(data) > max_bytes:
        raise ValidationFailure(
            f"Image is larger than {max_bytes // (1024 * 1024)} MB",
            too_large=True,
        )
    return sniff_image(data)


def extension_for(content_type: str) -> str:
    return _EXTENSIONS.get(content_type, "jpg")


def to_data_uri(data: bytes, content_type: str = "image/jpeg") -> str:
    """Embed bytes in a base64 data URI"""
    return f"data:{content_type};base64,{base64.b64encode(data).decode('utf-8')}"


def parse_data_uri(uri: str) -> Tuple[bytes, str]:
    """
    Decode a base64 data URI.

    Returns:
        (data, content_type)

    Raises:
        ValidationFailure: If uri is not a base64 data URI
    """
    match = _DATA_URI.match(uri or "")
    if not match:
        raise ValidationFailure("Image must be a base64 data URI")
    try:
        data = base64.b64decode(match.group("data"), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValidationFailure("Image data URI is not valid base64") from e
    return data, match.group("mime") or "image/jpeg"


def decode_image_input(value: str, max_bytes: int) -> Tuple[bytes, str]:
    """Decode and validate a data URI sent by a client, before any network call."""
    data, _ = parse_data_uri(value)
    content_type = validate_image(data, max_bytes)
    return data, content_type


def encode_frame(frame: np.ndarray, quality: int = 80) -> bytes:
    """
    Encode a BGR frame (OpenCV layout) as JPEG bytes.

    Args:
        frame: numpy array of shape (H, W, 3) in BGR format
        quality: JPEG quality
    """
    rgb_frame = frame[:, :, ::-1]
    pil_image = Image.fromarray(rgb_frame.astype(np.uint8))
    buffer = BytesIO()
    pil_image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def object_name_from_url(url: str, marker: str = "/objects/") -> Optional[str]:
    """Object name embedded in a public URL built by the object store."""
    if not url or url.startswith("data:") or marker not in url:
        return None
    return url.rsplit(marker, 1)[1].split("?", 1)[0] or None
