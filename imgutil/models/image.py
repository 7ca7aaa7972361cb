from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Image:
    """
    Owned pixel buffer: BGR pixels (+ optional source path for bookkeeping).
    No OpenCV logic in this file.

    Use as a context manager so the buffer is released on every exit path:

        with image_service.load("photo.jpg") as img:
            image_service.put_text(img, "hello")
    """
    pixels: np.ndarray | None  # Shape (H, W, 3), dtype uint8, BGR order.
    path: Path | None = None  # Source of the image.

    @property
    def closed(self) -> bool:
        return self.pixels is None

    @property
    def is_empty(self) -> bool:
        return self.pixels is None or self.pixels.size == 0

    def close(self) -> None:
        """
        Release the pixel buffer. Never raises: releasing an already
        released buffer is only reported in the log.
        """
        if self.pixels is None:
            logger.warning(f"Image.close(): buffer {id(self):#x} already released ({self.path})")
            return
        self.pixels = None

    def __enter__(self) -> "Image":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
