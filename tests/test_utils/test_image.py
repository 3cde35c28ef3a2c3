"""Tests for image payload helpers."""

import pytest

from desmos_graph.utils.image import decode_data_url, image_to_base64, to_data_url


class TestDataUrls:
    def test_to_data_url(self, sample_image_bytes):
        url = to_data_url(sample_image_bytes)
        assert url == "data:image/png;base64," + image_to_base64(sample_image_bytes)

    def test_decode(self, sample_image_bytes):
        assert decode_data_url(to_data_url(sample_image_bytes)) == sample_image_bytes

    def test_decode_rejects_plain_text(self):
        with pytest.raises(ValueError, match="base64 data URL"):
            decode_data_url("not a data url")

    def test_decode_rejects_bad_payload(self):
        with pytest.raises(ValueError, match="Invalid base64"):
            decode_data_url("data:image/png;base64,@@@")
