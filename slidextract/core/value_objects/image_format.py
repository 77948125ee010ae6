"""Still-image formats supported for extracted slides."""

from __future__ import annotations

from enum import Enum

from slidextract.core.exceptions import UnsupportedFormatError


class ImageFormat(str, Enum):
    """Output still-image format.

    ``bmp`` is the fastest to write and read back, ``png`` the slowest.
    """

    BMP = "bmp"
    PNG = "png"
    JPEG = "jpeg"

    @classmethod
    def parse(cls, name: str) -> ImageFormat:
        """Exact, case-sensitive match on bmp, png, jpg or jpeg."""
        key = "jpeg" if name == "jpg" else name
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedFormatError(name) from None

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value

    @property
    def ffmpeg_codec(self) -> str:
        """Encoder name used when ffmpeg writes the image to a pipe."""
        return "mjpeg" if self is ImageFormat.JPEG else self.value

    @property
    def pil_format(self) -> str:
        return self.value.upper()
