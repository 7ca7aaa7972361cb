"""
Error taxonomy for imgutil.

Every error carries a short message naming the operation that failed.
Nothing is retried internally; callers decide what to do.
"""


class ImgUtilError(Exception):
    """Base class for all imgutil errors."""


class DecodeError(ImgUtilError, ValueError):
    """Input bytes or file could not be decoded into pixels."""


class EncodeError(ImgUtilError):
    """Pixels could not be serialised (e.g. JPEG encoding failed)."""


class BadBufferError(ImgUtilError, ValueError):
    """Operation attempted on an empty or already released pixel buffer."""


class OpenError(ImgUtilError, OSError):
    """Input file could not be opened for reading."""


class CreateError(ImgUtilError, OSError):
    """Output file could not be created for writing."""
