from __future__ import annotations
from pathlib import Path
from typing import Union, Iterable, Iterator
import logging
import os
import numpy as np
import cv2
from dotenv import load_dotenv

from ..errors import DecodeError
from ..models.image import Image

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O and decoding for Image entities.
    """
    def __init__(self, valid_exts: Iterable[str] | None = None):
        if valid_exts is None:
            valid_exts = os.getenv("IMGUTIL_VALID_EXTENSIONS", ".jpg,.jpeg,.png,.bmp,.webp").split(",")
        self.VALID_EXTS = {ext.strip().lower() for ext in valid_exts if ext.strip()}

    @staticmethod
    def retrieve_image_dimensions(img: Image):
        return img.pixels.shape[:2]

    @staticmethod
    def load(path: Union[str, Path]) -> Image:
        path = Path(path)
        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None or arr_bgr.size == 0:
            raise DecodeError(f"load(): failed to load image {path}")
        return Image(pixels=arr_bgr, path=path)

    @staticmethod
    def decode(buffer: bytes) -> Image:
        raw = np.frombuffer(buffer, dtype=np.uint8)
        try:
            arr_bgr = cv2.imdecode(raw, cv2.IMREAD_COLOR)
        except cv2.error as err:
            # imdecode asserts on an empty buffer
            raise DecodeError(f"from_bytes(): failed to decode image: {err}") from err
        if arr_bgr is None or arr_bgr.size == 0:
            raise DecodeError(f"from_bytes(): failed to decode image ({len(buffer)} bytes)")
        return Image(pixels=arr_bgr)

    @staticmethod
    def save_pixels(pixels: np.ndarray, path: Union[str, Path]) -> Path:
        """Write a BGR image or a single channel mask; format follows the suffix."""
        path = Path(path)
        try:
            written = cv2.imwrite(str(path), pixels)
        except cv2.error as err:
            raise OSError(f"save_pixels(): cv2.imwrite failed for {path}: {err}") from err
        if not written:
            raise OSError(f"save_pixels(): cv2.imwrite failed for {path}")
        return path

    def save(self, image: Image, path: Union[str, Path] = None) -> Path:
        target = path or image.path
        if target is None:
            raise ValueError("save(): image has no path and none was given")
        return self.save_pixels(image.pixels, target)

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield Image objects one at a time.  Nothing accumulates in memory.
        Unreadable files are logged and skipped.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed or not p.is_file():
                logger.debug(f"Skipping {p}")
                continue
            try:
                img = self.load(p)
            except DecodeError as err:
                logger.warning(f"Skipping {p.name}: {err}")
                continue
            logger.debug(f"Loaded: {p}")
            yield img

