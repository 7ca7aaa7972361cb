from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ColorRange:
    """
    Inclusive HSV bounds used for in-range masking.
    OpenCV scale: H in [0, 179], S and V in [0, 255].
    A fourth (alpha) value may be given; it is ignored.
    """
    lower: Tuple[int, int, int]
    upper: Tuple[int, int, int]

    def __post_init__(self):
        if len(self.lower) not in (3, 4) or len(self.upper) not in (3, 4):
            raise ValueError(f"ColorRange bounds must have 3 or 4 channels, got {self.lower} / {self.upper}")
        # frozen: bypass __setattr__ to drop the unused alpha
        object.__setattr__(self, "lower", tuple(self.lower[:3]))
        object.__setattr__(self, "upper", tuple(self.upper[:3]))


BLUE = ColorRange(lower=(102, 31, 160), upper=(115, 255, 255))
