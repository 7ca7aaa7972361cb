from io import BytesIO

import pytest
from PIL import Image as PILImage

from imgutil.errors import CreateError, DecodeError, EncodeError, OpenError
from conftest import make_jpeg_bytes, make_png_bytes


def _size(data: bytes):
    with PILImage.open(BytesIO(data)) as img:
        assert img.format == "JPEG"
        return img.size


def test_scale_buffer_to_exact_size(jpeg_service, jpeg_bytes):
    assert _size(jpeg_service.scale_buffer(jpeg_bytes, 100, 50)) == (100, 50)


def test_scale_buffer_same_size(jpeg_service):
    data = make_jpeg_bytes(37, 23)
    assert _size(jpeg_service.scale_buffer(data, 37, 23)) == (37, 23)


def test_scale_buffer_keeps_content(jpeg_service, jpeg_bytes):
    out = jpeg_service.scale_buffer(jpeg_bytes, 32, 24)
    with PILImage.open(BytesIO(out)) as img:
        left = img.getpixel((1, 12))[0]
        right = img.getpixel((30, 12))[0]
    # Gradient runs dark → light left to right.
    assert left < 60 < 200 < right


@pytest.mark.parametrize("payload", [b"", b"garbage bytes", make_png_bytes(8, 8)])
def test_scale_buffer_rejects_non_jpeg(jpeg_service, payload):
    with pytest.raises(DecodeError):
        jpeg_service.scale_buffer(payload, 10, 10)


def test_scale_buffer_rejects_truncated_jpeg(jpeg_service, jpeg_bytes):
    with pytest.raises(DecodeError):
        jpeg_service.scale_buffer(jpeg_bytes[: len(jpeg_bytes) // 2], 10, 10)


def _claim_size(data: bytes, width: int, height: int) -> bytes:
    """Rewrite the baseline frame header (SOF0) to announce another size."""
    sof = data.index(b"\xff\xc0")
    header = bytearray(data)
    # marker(2) length(2) precision(1) height(2) width(2)
    header[sof + 5:sof + 7] = height.to_bytes(2, "big")
    header[sof + 7:sof + 9] = width.to_bytes(2, "big")
    return bytes(header)


def test_scale_buffer_rejects_oversized_header(jpeg_service, jpeg_bytes):
    # 200M pixels, past Pillow's decompression bomb limit
    data = _claim_size(jpeg_bytes, 20000, 10000)
    with pytest.raises(DecodeError):
        jpeg_service.scale_buffer(data, 10, 10)


def test_scale_file_rejects_oversized_header(jpeg_service, jpeg_bytes, tmp_path):
    src = tmp_path / "huge.jpg"
    src.write_bytes(_claim_size(jpeg_bytes, 20000, 10000))
    with pytest.raises(DecodeError):
        jpeg_service.scale_file(src, tmp_path / "out.jpg", 10, 10)


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (70000, 10)])
def test_scale_buffer_unencodable_size(jpeg_service, jpeg_bytes, width, height):
    with pytest.raises(EncodeError):
        jpeg_service.scale_buffer(jpeg_bytes, width, height)


def test_scale_file(jpeg_service, jpeg_bytes, tmp_path):
    src = tmp_path / "in.jpg"
    src.write_bytes(jpeg_bytes)
    dst = tmp_path / "out.jpg"
    jpeg_service.scale_file(src, dst, 100, 50)
    assert _size(dst.read_bytes()) == (100, 50)


def test_scale_file_missing_input(jpeg_service, tmp_path):
    with pytest.raises(OpenError):
        jpeg_service.scale_file(tmp_path / "missing.jpg", tmp_path / "out.jpg", 10, 10)


def test_scale_file_uncreatable_output(jpeg_service, jpeg_bytes, tmp_path):
    src = tmp_path / "in.jpg"
    src.write_bytes(jpeg_bytes)
    with pytest.raises(CreateError):
        jpeg_service.scale_file(src, tmp_path / "no_such_dir" / "out.jpg", 10, 10)


def test_scale_file_non_jpeg_input(jpeg_service, tmp_path):
    src = tmp_path / "in.jpg"
    src.write_bytes(make_png_bytes(8, 8))
    with pytest.raises(DecodeError):
        jpeg_service.scale_file(src, tmp_path / "out.jpg", 10, 10)


def test_open_and_create_errors_are_os_errors():
    assert issubclass(OpenError, OSError)
    assert issubclass(CreateError, OSError)
