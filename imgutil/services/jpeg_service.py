from __future__ import annotations
from io import BytesIO
from pathlib import Path
from typing import Union
import logging
import os
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..errors import CreateError, EncodeError, OpenError
from ..repositories.jpeg_repository import JPEG_MAX_SIDE, JpegRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class JpegService:
    """
    Rescales JPEGs with bilinear interpolation.
    Works on raw JPEG bytes or files, never on Image objects.
    """

    def __init__(self, quality: int = None):
        self.quality = quality if quality is not None else int(os.getenv("IMGUTIL_JPEG_QUALITY", "75"))
        self.jpeg_repository = JpegRepository()

    @staticmethod
    def _scale(src: PILImage.Image, width: int, height: int, op: str) -> PILImage.Image:
        if not (1 <= width <= JPEG_MAX_SIDE and 1 <= height <= JPEG_MAX_SIDE):
            raise EncodeError(f"{op}: {width}x{height} cannot be stored as JPEG")
        # Blank canvas; the scaled source replaces it wholesale.
        dst = PILImage.new("RGBA", (width, height))
        # Bilinear: BICUBIC/LANCZOS look marginally better and are much slower.
        scaled = src.convert("RGBA").resize((width, height), PILImage.BILINEAR)
        dst.paste(scaled, (0, 0))
        return dst

    def scale_buffer(self, data: bytes, width: int, height: int) -> bytes:
        """
        Args:
            data: JPEG encoded bytes.
            width, height: exact output size in pixels.

        Returns:
            (bytes): the rescaled image, JPEG encoded.
        """
        src = self.jpeg_repository.decode(BytesIO(data), op="scale_buffer")
        dst = self._scale(src, width, height, op="scale_buffer")
        out = BytesIO()
        self.jpeg_repository.encode(dst, out, quality=self.quality, op="scale_buffer")
        logger.debug(f"scale_buffer: {src.size[0]}x{src.size[1]} → {width}x{height}, {len(out.getvalue())} bytes")
        return out.getvalue()

    def scale_file(self,
                   input_path: Union[str, Path],
                   output_path: Union[str, Path],
                   width: int,
                   height: int) -> None:
        """
        Same as scale_buffer, reading `input_path` and writing `output_path`.
        The output file is created before decoding starts.
        """
        try:
            src_file = open(input_path, "rb")
        except OSError as err:
            raise OpenError(f"scale_file.open(): {err}") from err
        with src_file:
            try:
                dst_file = open(output_path, "wb")
            except OSError as err:
                raise CreateError(f"scale_file.create(): {err}") from err
            with dst_file:
                src = self.jpeg_repository.decode(src_file, op="scale_file")
                dst = self._scale(src, width, height, op="scale_file")
                self.jpeg_repository.encode(dst, dst_file, quality=self.quality, op="scale_file")
        logger.info(f"scale_file: {input_path} → {output_path} ({width}x{height})")
