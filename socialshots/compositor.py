#!/usr/bin/env python3
"""Compositor - paints a placed source onto a fresh background canvas."""

from dataclasses import dataclass
from typing import Optional, Union

from PIL import Image, ImageColor

from .codec import RasterImage
from .errors import InvalidRequestError
from .geometry import FitPolicy, Placement, Rect, resolve_placement

DEFAULT_BACKGROUND = "#ffffff"

# One filter for every transform so output is reproducible
RESAMPLE = Image.LANCZOS

Color = Union[str, tuple]


def parse_color(value: Color) -> tuple:
    """Return an opaque (r, g, b) tuple for "#rrggbb", a color name or a tuple."""
    if isinstance(value, (tuple, list)):
        if len(value) not in (3, 4) or not all(
            isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value
        ):
            raise InvalidRequestError(f"Invalid color: {value!r}")
        return tuple(value[:3])
    try:
        rgb = ImageColor.getrgb(str(value).strip())
    except ValueError:
        raise InvalidRequestError(f"Invalid color: {value!r}") from None
    return rgb[:3]


@dataclass(frozen=True)
class TransformRequest:
    source: RasterImage
    target: Rect
    policy: FitPolicy = FitPolicy.FIT_WITHIN
    background: Color = DEFAULT_BACKGROUND

    def placement(self) -> Placement:
        return resolve_placement(self.source.size, self.target, self.policy)


def render(request: TransformRequest, placement: Optional[Placement] = None) -> Image.Image:
    """Produce an RGB surface of exactly ``request.target``.

    Every pixel starts as the background color, so letterbox bars are never
    transparent. Source alpha is blended over the background. The source
    image is left untouched.
    """
    if placement is None:
        placement = request.placement()
    src, dst = placement

    canvas = Image.new("RGB", tuple(request.target), parse_color(request.background))
    region = request.source.image.resize((dst.width, dst.height), RESAMPLE, box=src.bounds)

    if region.mode == "RGBA":
        canvas.paste(region, (dst.x, dst.y), region)
    else:
        canvas.paste(region, (dst.x, dst.y))
    return canvas
