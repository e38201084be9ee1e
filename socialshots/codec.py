#!/usr/bin/env python3
"""Codec boundary - decode bytes into RasterImage, encode surfaces to bytes.

Pillow does the actual compression; this module only maps the engine's
abstract EncodeSpec onto Pillow save options and wraps codec failures.
"""

import io
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, DegenerateSourceError, EncodeError, InvalidRequestError
from .geometry import Rect


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pillow_name(self) -> str:
        return self.name

    @classmethod
    def parse(cls, value) -> "ImageFormat":
        """Accept "jpeg", "JPG", "png", ... or an ImageFormat."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "jpg":
            name = "jpeg"
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise InvalidRequestError(f"Unsupported format: {value!r} (use {choices})") from None

    @classmethod
    def from_mime(cls, mime_type: Optional[str]) -> "ImageFormat":
        """Format for a declared MIME type; types we cannot write fall back to PNG."""
        for fmt in cls:
            if mime_type == fmt.mime_type or (fmt is cls.JPEG and mime_type == "image/jpg"):
                return fmt
        return cls.PNG


@dataclass(frozen=True)
class EncodeSpec:
    format: ImageFormat
    quality: float = 0.92

    def __post_init__(self):
        object.__setattr__(self, "format", ImageFormat.parse(self.format))
        if isinstance(self.quality, bool) or not isinstance(self.quality, (int, float)):
            raise InvalidRequestError(f"Quality must be a number, got {self.quality!r}")
        if not 0.0 <= self.quality <= 1.0:
            raise InvalidRequestError(f"Quality must be between 0 and 1, got {self.quality}")

    def save_options(self) -> dict:
        """Pillow save() keyword arguments for this spec."""
        if self.format is ImageFormat.PNG:
            # Lossless; quality has no meaning here
            return {"optimize": True}
        return {"quality": int(round(self.quality * 100))}


@dataclass(frozen=True)
class RasterImage:
    """Decoded pixels. Never modified after decode."""

    image: Image.Image
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise DegenerateSourceError(f"Source image is {self.width}x{self.height}")

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        # convert() always returns a copy, detached from the decoder's file
        image = image.convert("RGBA")
        width, height = image.size
        return cls(image=image, width=width, height=height)

    @property
    def size(self) -> Rect:
        return Rect(self.width, self.height)

    def pixel(self, x: int, y: int) -> tuple:
        return self.image.getpixel((x, y))


def decode(data: bytes, mime_type: Optional[str] = None) -> RasterImage:
    """Decode image bytes. Raises DecodeError if Pillow cannot read them."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            raster = RasterImage.from_pil(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError,
            ValueError, SyntaxError) as exc:
        raise DecodeError(f"Cannot decode {mime_type or 'image'}: {exc}") from exc
    return raster


def encode(surface: Image.Image, spec: EncodeSpec) -> bytes:
    """Encode a composited surface. Raises EncodeError on codec failure."""
    if spec.format is ImageFormat.JPEG and surface.mode not in ("RGB", "L"):
        surface = surface.convert("RGB")
    buf = io.BytesIO()
    try:
        surface.save(buf, spec.format.pillow_name, **spec.save_options())
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Cannot encode {spec.format.value}: {exc}") from exc
    return buf.getvalue()


def change_extension(filename: str, fmt: ImageFormat) -> str:
    """photo.png -> photo.webp; names without a dot get the extension appended."""
    stem, dot, _ext = filename.rpartition(".")
    if not dot:
        return f"{filename}.{fmt.value}"
    return f"{stem}.{fmt.value}"
