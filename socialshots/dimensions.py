#!/usr/bin/env python3
"""Dimension model for plain resizing - aspect-ratio locked width/height."""

from dataclasses import dataclass
from typing import Optional, Union

from .errors import DegenerateSourceError, InvalidDimensionError, InvalidRequestError
from .geometry import Rect, round_half_up

ANCHORS = ("width", "height")


def lock_aspect(original: Rect) -> float:
    """Return width/height of the original image."""
    if original.height == 0 or original.width == 0:
        raise DegenerateSourceError(
            f"Cannot lock aspect of a {original.width}x{original.height} image"
        )
    return original.width / original.height


def derive_from_width(width: int, ratio: float) -> int:
    return max(1, round_half_up(width / ratio))


def derive_from_height(height: int, ratio: float) -> int:
    return max(1, round_half_up(height * ratio))


def parse_dimension(value: Union[int, str, None], name: str = "size") -> int:
    """Parse a user-entered dimension.

    Accepts ints and numeric strings ("1280", " 720 "). Anything non-positive,
    fractional or unparseable raises InvalidDimensionError.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidDimensionError(f"Invalid {name}: {value!r}")
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            raise InvalidDimensionError(f"Invalid {name}: {value!r}") from None
    if number <= 0:
        raise InvalidDimensionError(f"Invalid {name}: {value!r} (must be > 0)")
    return number


@dataclass(frozen=True)
class AspectLock:
    """Aspect ratio captured when an image is selected.

    Editing one axis recomputes the other while ``enabled``; otherwise both
    axes pass through untouched.
    """

    ratio: Optional[float]
    enabled: bool = True

    @classmethod
    def from_source(cls, original: Rect, enabled: bool = True) -> "AspectLock":
        return cls(lock_aspect(original), enabled)

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.ratio)

    def set_width(self, width: int, height: int) -> Rect:
        if self.active:
            return Rect(width, derive_from_width(width, self.ratio))
        return Rect(width, height)

    def set_height(self, width: int, height: int) -> Rect:
        if self.active:
            return Rect(derive_from_height(height, self.ratio), height)
        return Rect(width, height)


def resize_target(
    source: Rect,
    width: int,
    height: int,
    keep_aspect: bool = False,
    anchor: str = "width",
) -> Rect:
    """Output rectangle for one image of a resize request.

    With ``keep_aspect`` the anchored axis is kept and the other one is
    derived from this image's own ratio.
    """
    if anchor not in ANCHORS:
        raise InvalidRequestError(f"Invalid anchor: {anchor!r} (use width or height)")
    lock = AspectLock.from_source(source, enabled=keep_aspect)
    if anchor == "height":
        return lock.set_height(width, height)
    return lock.set_width(width, height)
