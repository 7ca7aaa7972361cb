from __future__ import annotations
from typing import BinaryIO
from PIL import Image as PILImage, UnidentifiedImageError

from ..errors import DecodeError, EncodeError

# Largest side a baseline JPEG header can carry.
JPEG_MAX_SIDE = 65535


class JpegRepository:
    """
    JPEG codec access through Pillow.  Works on binary streams only;
    opening and creating files is left to the caller.
    """

    @staticmethod
    def decode(stream: BinaryIO, op: str = "decode") -> PILImage.Image:
        """
        Decode a JPEG stream into a fully loaded PIL image.
        Anything that is not a JPEG is rejected.
        """
        try:
            src = PILImage.open(stream, formats=["JPEG"])
            src.load()
        except (UnidentifiedImageError, PILImage.DecompressionBombError,
                OSError, SyntaxError, ValueError) as err:
            raise DecodeError(f"{op}.decode(): {err}") from err
        return src

    @staticmethod
    def encode(img: PILImage.Image, stream: BinaryIO, quality: int = 75, op: str = "encode") -> None:
        """
        Encode `img` as JPEG into `stream`.  Alpha is dropped, JPEG has none.
        """
        width, height = img.size
        if not (1 <= width <= JPEG_MAX_SIDE and 1 <= height <= JPEG_MAX_SIDE):
            raise EncodeError(f"{op}.encode(): {width}x{height} cannot be stored as JPEG")
        if img.mode != "RGB":
            img = img.convert("RGB")
        try:
            img.save(stream, format="JPEG", quality=quality)
        except (OSError, ValueError) as err:
            raise EncodeError(f"{op}.encode(): {err}") from err
