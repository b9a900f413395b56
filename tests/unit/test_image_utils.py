"""
Unit tests for image validation and data URI helpers.
"""
import numpy as np
import pytest

from ppe_monitor.exceptions import ValidationFailure
from ppe_monitor.infrastructure.media.image_utils import (
    decode_image_input,
    encode_frame,
    extension_for,
    object_name_from_url,
    parse_data_uri,
    sniff_image,
    to_data_uri,
    validate_image,
)


class TestSniffImage:
    """Tests for sniff_image and validate_image"""

    def test_jpeg(self, jpeg_bytes):
        assert sniff_image(jpeg_bytes) == "image/jpeg"

    def test_png(self, png_bytes):
        assert sniff_image(png_bytes) == "image/png"

    def test_not_an_image(self):
        with pytest.raises(ValidationFailure) as exc_info:
            sniff_image(b"%PDF-1.4 definitely not an image")
        assert exc_info.value.too_large is False

    def test_decompression_bomb_is_too_large(self, monkeypatch, png_bytes):
        # 8x8 pixels is over twice this limit, which Pillow refuses to open
        monkeypatch.setattr("PIL.Image.MAX_IMAGE_PIXELS", 16)
        with pytest.raises(ValidationFailure) as exc_info:
            validate_image(png_bytes, max_bytes=10 * 1024 * 1024)
        assert exc_info.value.too_large is True

    def test_empty(self):
        with pytest.raises(ValidationFailure):
            sniff_image(b"")

    def test_too_large_checked_first(self):
        with pytest.raises(ValidationFailure) as exc_info:
            validate_image(b"x" * 2048, max_bytes=1024)
        assert exc_info.value.too_large is True


class TestDataUri:
    """Tests for data URI encoding and decoding"""

    def test_encode_then_decode(self, png_bytes):
        data, content_type = parse_data_uri(to_data_uri(png_bytes, "image/png"))
        assert data == png_bytes
        assert content_type == "image/png"

    def test_rejects_plain_base64(self):
        with pytest.raises(ValidationFailure, match="data URI"):
            parse_data_uri("aGVsbG8=")

    def test_decode_image_input_validates_content(self):
        with pytest.raises(ValidationFailure):
            decode_image_input(to_data_uri(b"not an image"), max_bytes=1024 * 1024)

    def test_decode_image_input_sniffs_real_type(self, png_bytes):
        # A PNG sent with a JPEG label is reported as PNG
        data, content_type = decode_image_input(to_data_uri(png_bytes, "image/jpeg"), max_bytes=1024 * 1024)
        assert data == png_bytes
        assert content_type == "image/png"


class TestMiscHelpers:
    """Tests for extension_for, encode_frame and object_name_from_url"""

    def test_extension_for(self):
        assert extension_for("image/png") == "png"
        assert extension_for("application/unknown") == "jpg"

    def test_encode_frame_produces_jpeg(self):
        frame = np.zeros((6, 6, 3), dtype=np.uint8)
        frame[:, :, 2] = 255
        assert sniff_image(encode_frame(frame)) == "image/jpeg"

    def test_object_name_from_url(self):
        url = "http://localhost:8000/api/v1/captures/objects/ppe_1.jpg"
        assert object_name_from_url(url) == "ppe_1.jpg"
        assert object_name_from_url("data:image/jpeg;base64,AAAA") is None
        assert object_name_from_url("") is None
