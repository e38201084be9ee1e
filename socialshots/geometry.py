#!/usr/bin/env python3
"""Geometry resolver - decides which source pixels land where on the target.

Two fit policies:

  CROP_TO_FILL  center square of the source, scaled over the whole canvas
  FIT_WITHIN    whole source, scaled to fit and centered (letterbox)

Everything here is pure integer arithmetic; no pixels are touched.
"""

import math
from enum import Enum
from typing import NamedTuple

from .errors import GeometryError


class Rect(NamedTuple):
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def ratio(self) -> float:
        return self.width / self.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Box(NamedTuple):
    """A Rect placed at an offset inside an image."""

    x: int
    y: int
    width: int
    height: int

    @property
    def size(self) -> Rect:
        return Rect(self.width, self.height)

    @property
    def bounds(self) -> tuple:
        """(left, top, right, bottom) - the box order Pillow expects."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class Placement(NamedTuple):
    src: Box
    dst: Box


class FitPolicy(str, Enum):
    CROP_TO_FILL = "crop"
    FIT_WITHIN = "fit"

    @classmethod
    def for_square(cls, is_square: bool) -> "FitPolicy":
        """Square assets (avatars, icons) crop; banners and posts letterbox."""
        return cls.CROP_TO_FILL if is_square else cls.FIT_WITHIN


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_area(source: Rect, target: Rect):
    if source.width <= 0 or source.height <= 0:
        raise GeometryError(f"Source has no area: {source.width}x{source.height}")
    if target.width <= 0 or target.height <= 0:
        raise GeometryError(f"Target has no area: {target.width}x{target.height}")


def _clamp(value: int, upper: int) -> int:
    return max(1, min(value, upper))


def crop_to_fill(source: Rect, target: Rect) -> Placement:
    side = min(source.width, source.height)
    src = Box((source.width - side) // 2, (source.height - side) // 2, side, side)
    dst = Box(0, 0, target.width, target.height)
    return Placement(src, dst)


def fit_within(source: Rect, target: Rect) -> Placement:
    source_ratio = source.width / source.height
    target_ratio = target.width / target.height

    if target_ratio > source_ratio:
        # Target is relatively wider: height binds, bars left and right
        dst_h = target.height
        dst_w = round_half_up(target.height * source_ratio)
    else:
        # Target is relatively taller or equal: width binds, bars top and bottom
        dst_w = target.width
        dst_h = round_half_up(target.width / source_ratio)

    dst_w = _clamp(dst_w, target.width)
    dst_h = _clamp(dst_h, target.height)

    src = Box(0, 0, source.width, source.height)
    dst = Box((target.width - dst_w) // 2, (target.height - dst_h) // 2, dst_w, dst_h)
    return Placement(src, dst)


def full_placement(source: Rect, target: Rect) -> Placement:
    """Stretch the whole source over the whole target (plain resize/convert)."""
    _check_area(source, target)
    return Placement(
        Box(0, 0, source.width, source.height),
        Box(0, 0, target.width, target.height),
    )


def resolve_placement(source: Rect, target: Rect, policy: FitPolicy) -> Placement:
    """Compute the source box to sample and the destination box to paint.

    Raises GeometryError when either rectangle has zero area. The result
    depends only on the arguments, so repeated calls return equal placements.
    """
    _check_area(source, target)
    policy = FitPolicy(policy)
    if policy is FitPolicy.CROP_TO_FILL:
        return crop_to_fill(source, target)
    return fit_within(source, target)
