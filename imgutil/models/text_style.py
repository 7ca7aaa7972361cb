from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TextStyle:
    """Caption drawing parameters picked from the image height."""
    thickness: int
    font_scale: float
    x: int
    y: int

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y


# (max rows, style). Hand calibrated for thumbnails up to 12 MP photos.
# TODO: derive scale and anchor from image size instead of fixed tiers.
TEXT_TIERS: Tuple[Tuple[int, TextStyle], ...] = (
    (256, TextStyle(thickness=2, font_scale=0.6, x=10, y=25)),    # thumb
    (400, TextStyle(thickness=1, font_scale=0.3, x=10, y=10)),
    (720, TextStyle(thickness=2, font_scale=0.8, x=10, y=50)),
    (2992, TextStyle(thickness=3, font_scale=3.0, x=10, y=100)),
)
