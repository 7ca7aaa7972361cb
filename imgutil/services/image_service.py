from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union
import logging
import os
import cv2
import numpy as np
from dotenv import load_dotenv

from ..errors import BadBufferError
from ..models.color_range import BLUE, ColorRange
from ..models.image import Image
from ..models.text_style import TEXT_TIERS, TextStyle
from ..repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# RGBA (255, 0, 140, 0) handed to OpenCV as a BGR(A) scalar.
TEXT_COLOR_BGR = (140, 0, 255, 0)
TEXT_FONT = cv2.FONT_HERSHEY_SIMPLEX | cv2.FONT_ITALIC

MASK_WINDOW_SIZE = (640, 480)


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class ImageService:
    """
    Business layer for Image objects: loading, captioning, brightness
    and colour masking.  File and codec details live in ImageRepository.
    """

    def __init__(self,
                 tall_policy: str = None,
                 mask_show: bool = None,
                 mask_output: Union[str, Path, None] = None,
                 mask_window: str = None):
        self.tall_policy = (tall_policy or os.getenv("IMGUTIL_TEXT_TALL_POLICY", "clamp")).lower()
        if self.tall_policy not in {"clamp", "skip"}:
            raise ValueError(f"Unknown text tall policy: {self.tall_policy!r} (expected 'clamp' or 'skip')")
        self.mask_show = _env_flag("IMGUTIL_MASK_SHOW") if mask_show is None else mask_show
        self.mask_output = mask_output or os.getenv("IMGUTIL_MASK_OUTPUT") or None
        self.mask_window = mask_window or os.getenv("IMGUTIL_MASK_WINDOW", "Hello")
        self.image_repository = ImageRepository()

    # ─── Lifecycle ────────────────────────────────────────────────────
    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def from_bytes(self, buffer: bytes) -> Image:
        """Decode an encoded image held in memory."""
        return self.image_repository.decode(buffer)

    @staticmethod
    def close(image: Image) -> None:
        image.close()

    def save(self, image: Image, path: Union[str, Path] = None) -> Path:
        """Write the (possibly captioned) pixels to `path`, or back to image.path."""
        self._require_pixels(image, "save")
        return self.image_repository.save(image, path)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield images lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder,
                                              recursive=recursive,
                                              exts=exts)

    @staticmethod
    def _require_pixels(img: Image, op: str) -> np.ndarray:
        if img.is_empty:
            raise BadBufferError(f"{op}: bad matrix (empty or released buffer)")
        return img.pixels

    # ─── Statistics ───────────────────────────────────────────────────
    def mean_brightness(self, img: Image) -> float:
        """
        Args:
            img (Image): A BGR image.

        Returns:
            (float): Mean of the HSV value channel, normalised to [0, 1].
        """
        pixels = self._require_pixels(img, "mean_brightness")
        hsv = cv2.cvtColor(pixels, cv2.COLOR_BGR2HSV)
        return float(hsv[:, :, 2].mean()) / 255.0

    # ─── Text overlay ─────────────────────────────────────────────────
    def text_style_for(self, rows: int) -> Optional[TextStyle]:
        """
        Pick caption parameters for an image `rows` pixels tall.
        Taller than the last tier: the last tier under the "clamp"
        policy, None under "skip".
        """
        for max_rows, style in TEXT_TIERS:
            if rows <= max_rows:
                return style
        if self.tall_policy == "clamp":
            return TEXT_TIERS[-1][1]
        return None

    def put_text(self, img: Image, text: str) -> None:
        """Burn `text` into the image, in place."""
        pixels = self._require_pixels(img, "put_text")
        rows, _ = self.image_repository.retrieve_image_dimensions(img)
        style = self.text_style_for(rows)
        if style is None:
            logger.debug(f"put_text: {rows} rows is above every tier, no caption drawn")
            return
        cv2.putText(pixels, text, style.origin, TEXT_FONT, style.font_scale,
                    TEXT_COLOR_BGR, style.thickness)

    # ─── Colour masking ───────────────────────────────────────────────
    @staticmethod
    def in_range_mask(hsv: np.ndarray, color_range: ColorRange) -> np.ndarray:
        """
        Returns uint8 mask (H, W): 255 where every channel of `hsv` lies
        within [lower, upper], 0 elsewhere.
        """
        lower = np.full(hsv.shape, color_range.lower, dtype=np.uint8)
        upper = np.full(hsv.shape, color_range.upper, dtype=np.uint8)
        return cv2.inRange(hsv, lower, upper)

    def color_mask(self, img: Image, color_range: ColorRange, op: str = "color_mask") -> np.ndarray:
        pixels = self._require_pixels(img, op)
        hsv = cv2.cvtColor(pixels, cv2.COLOR_BGR2HSV)
        return self.in_range_mask(hsv, color_range)

    def blue_mask(self,
                  img: Image,
                  show: bool = None,
                  output_path: Union[str, Path, None] = None) -> np.ndarray:
        """
        Mask the blue areas of an image.

        • output_path (or IMGUTIL_MASK_OUTPUT) → mask written to disk.
        • show=True (or IMGUTIL_MASK_SHOW=1) → mask shown in a window,
          blocking until a key is pressed.
        """
        mask = self.color_mask(img, BLUE, op="blue_mask")

        output_path = output_path or self.mask_output
        if output_path:
            written = self.image_repository.save_pixels(mask, output_path)
            logger.info(f"blue_mask: wrote mask to {written}")

        if self.mask_show if show is None else show:
            self._show_blocking(mask)
        return mask

    def _show_blocking(self, mask: np.ndarray) -> None:
        cv2.namedWindow(self.mask_window, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.mask_window, *MASK_WINDOW_SIZE)
        cv2.imshow(self.mask_window, mask)
        cv2.waitKey(0)
        cv2.destroyWindow(self.mask_window)
