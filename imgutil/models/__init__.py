from .image import Image
from .color_range import ColorRange, BLUE
from .text_style import TextStyle

__all__ = ["Image", "ColorRange", "BLUE", "TextStyle"]
