#!/usr/bin/env python3
"""Error hierarchy for the transform engine.

Validation errors are raised before a batch starts and abort it.
Item errors are caught by the batch encoder and reported per image.
"""


class ImageTransformError(Exception):
    """Base exception for all SocialShots errors."""


# Batch-level: raised before anything is attempted

class ValidationError(ImageTransformError):
    """A request is malformed; the batch is not started."""


class InvalidDimensionError(ValidationError):
    """A user-supplied width, height or icon size is not a positive integer."""


class InvalidRequestError(ValidationError):
    """Bad quality, output format, anchor axis or background color."""


# Item-level: isolated per image inside a running batch

class DegenerateSourceError(ImageTransformError):
    """Source image has zero width or height."""


class GeometryError(ImageTransformError):
    """Placement cannot be computed for a zero-area source or target."""


class DecodeError(ImageTransformError):
    """The codec could not read the input bytes."""


class EncodeError(ImageTransformError):
    """The codec could not write the output surface."""


class UnknownPresetError(ImageTransformError):
    """Preset id is not in the catalog."""

    def __init__(self, preset_id: str):
        super().__init__(f"Unknown preset: {preset_id}")
        self.preset_id = preset_id
