"""
imgutil: small OpenCV / Pillow image helpers.

Free functions below share one lazily created service pair; use
ImageService / JpegService directly for per-instance configuration.
"""
from __future__ import annotations
from pathlib import Path
from typing import Union

from .errors import (
    ImgUtilError,
    DecodeError,
    EncodeError,
    BadBufferError,
    OpenError,
    CreateError,
)
from .models import Image, ColorRange, BLUE, TextStyle
from .services.image_service import ImageService
from .services.jpeg_service import JpegService

__version__ = "1.0.0"

_image_service: ImageService | None = None
_jpeg_service: JpegService | None = None


def _images() -> ImageService:
    global _image_service
    if _image_service is None:
        _image_service = ImageService()
    return _image_service


def _jpegs() -> JpegService:
    global _jpeg_service
    if _jpeg_service is None:
        _jpeg_service = JpegService()
    return _jpeg_service


def load(path: Union[str, Path]) -> Image:
    return _images().load(path)


def from_bytes(buffer: bytes) -> Image:
    return _images().from_bytes(buffer)


def close(image: Image) -> None:
    _images().close(image)


def mean_brightness(image: Image) -> float:
    return _images().mean_brightness(image)


def put_text(image: Image, text: str) -> None:
    _images().put_text(image, text)


def blue_mask(image: Image, show: bool = None, output_path: Union[str, Path, None] = None):
    return _images().blue_mask(image, show=show, output_path=output_path)


def scale_buffer(data: bytes, width: int, height: int) -> bytes:
    return _jpegs().scale_buffer(data, width, height)


def scale_file(input_path: Union[str, Path], output_path: Union[str, Path], width: int, height: int) -> None:
    _jpegs().scale_file(input_path, output_path, width, height)


__all__ = [
    "ImgUtilError", "DecodeError", "EncodeError", "BadBufferError", "OpenError", "CreateError",
    "Image", "ColorRange", "BLUE", "TextStyle",
    "ImageService", "JpegService",
    "load", "from_bytes", "close", "mean_brightness", "put_text", "blue_mask",
    "scale_buffer", "scale_file",
]
