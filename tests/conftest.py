from io import BytesIO

import cv2
import numpy as np
import pytest
from PIL import Image as PILImage

from imgutil.services.image_service import ImageService
from imgutil.services.jpeg_service import JpegService

# RGB(51, 119, 255) → OpenCV HSV (110, 204, 255), inside the blue range.
BLUE_BGR = (255, 119, 51)


def make_jpeg_bytes(width: int, height: int) -> bytes:
    """Horizontal gradient, encoded as JPEG."""
    ramp = np.linspace(0, 255, width, dtype=np.uint8)
    rgb = np.dstack([np.tile(ramp, (height, 1))] * 3)
    out = BytesIO()
    PILImage.fromarray(rgb).save(out, format="JPEG")
    return out.getvalue()


def make_png_bytes(width: int, height: int) -> bytes:
    ok, buf = cv2.imencode(".png", np.zeros((height, width, 3), dtype=np.uint8))
    assert ok
    return buf.tobytes()


@pytest.fixture
def image_service():
    return ImageService(tall_policy="clamp", mask_show=False)


@pytest.fixture
def jpeg_service():
    return JpegService(quality=75)


@pytest.fixture
def jpeg_bytes():
    return make_jpeg_bytes(64, 48)


@pytest.fixture
def gray_png(tmp_path):
    path = tmp_path / "gray.png"
    cv2.imwrite(str(path), np.full((40, 60, 3), 128, dtype=np.uint8))
    return path


@pytest.fixture
def half_blue_png(tmp_path):
    """Left half blue, right half black."""
    pixels = np.zeros((20, 40, 3), dtype=np.uint8)
    pixels[:, :20] = BLUE_BGR
    path = tmp_path / "half_blue.png"
    cv2.imwrite(str(path), pixels)
    return path
