#!/usr/bin/env python3
"""Transform requests - the three things a batch can do to its images.

Each request is an explicit, immutable parameter set. ``validate()`` raises
before a batch starts; ``plan()`` turns one decoded image into the outputs
it should produce.
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import NamedTuple, Optional, Union

from .codec import EncodeSpec, ImageFormat, RasterImage, change_extension
from .dimensions import ANCHORS, parse_dimension, resize_target
from .errors import InvalidRequestError
from .geometry import FitPolicy, Placement, Rect, full_placement, resolve_placement
from .presets import resolve_targets

RESIZE_QUALITY = 0.9
ICON_QUALITY = 0.95


class SourceImage(NamedTuple):
    """One acquired input: (filename, bytes, declared MIME type)."""

    filename: str
    data: bytes
    mime_type: Optional[str] = None


class Output(NamedTuple):
    """One planned output of a source image."""

    name: str
    target: Rect
    placement: Placement
    spec: EncodeSpec


def _check_quality(quality):
    # EncodeSpec does the range check
    EncodeSpec(ImageFormat.PNG, quality)


@dataclass(frozen=True)
class ResizeRequest:
    width: Union[int, str]
    height: Union[int, str]
    keep_aspect: bool = False
    anchor: str = "width"
    quality: float = RESIZE_QUALITY

    def validate(self):
        parse_dimension(self.width, "width")
        parse_dimension(self.height, "height")
        if self.anchor not in ANCHORS:
            raise InvalidRequestError(f"Invalid anchor: {self.anchor!r} (use width or height)")
        _check_quality(self.quality)

    def plan(self, source: SourceImage, raster: RasterImage) -> list:
        target = resize_target(
            raster.size,
            parse_dimension(self.width, "width"),
            parse_dimension(self.height, "height"),
            keep_aspect=self.keep_aspect,
            anchor=self.anchor,
        )
        spec = EncodeSpec(ImageFormat.from_mime(source.mime_type), self.quality)
        return [Output(source.filename, target, full_placement(raster.size, target), spec)]

    def describe(self) -> str:
        lock = f", keep aspect by {self.anchor}" if self.keep_aspect else ""
        return f"resize to {self.width}x{self.height}{lock}"


@dataclass(frozen=True)
class ConvertRequest:
    format: Union[ImageFormat, str]
    quality: float = 0.92

    def validate(self):
        ImageFormat.parse(self.format)
        _check_quality(self.quality)

    def plan(self, source: SourceImage, raster: RasterImage) -> list:
        spec = EncodeSpec(ImageFormat.parse(self.format), self.quality)
        name = change_extension(source.filename, spec.format)
        return [Output(name, raster.size, full_placement(raster.size, raster.size), spec)]

    def describe(self) -> str:
        return f"convert to {ImageFormat.parse(self.format).value.upper()}"


@dataclass(frozen=True)
class IconPresetRequest:
    preset_id: str
    custom_size: Optional[Union[int, str]] = None

    def validate(self):
        # Raises InvalidDimensionError for a bad custom size
        resolve_targets(self.preset_id, self.custom_size)

    def targets(self, log=None) -> list:
        return resolve_targets(self.preset_id, self.custom_size, log=log)

    def plan(self, source: SourceImage, raster: RasterImage, prefix: bool = False,
             targets: Optional[list] = None) -> list:
        spec = EncodeSpec(ImageFormat.PNG, ICON_QUALITY)
        stem = PurePath(source.filename).stem
        outputs = []
        for rect, policy, name in targets or self.targets():
            if prefix:
                name = f"{stem}_{name}"
            placement = resolve_placement(raster.size, rect, FitPolicy(policy))
            outputs.append(Output(f"{name}.png", rect, placement, spec))
        return outputs

    def describe(self) -> str:
        return f"generate {self.preset_id} images"


TransformKind = Union[ResizeRequest, ConvertRequest, IconPresetRequest]
