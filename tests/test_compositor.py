"""Tests for the compositor."""
import pytest
from PIL import Image

from socialshots.codec import RasterImage
from socialshots.compositor import TransformRequest, parse_color, render
from socialshots.errors import GeometryError, InvalidRequestError
from socialshots.geometry import FitPolicy, Rect, full_placement

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


class TestRender:
    """Tests for render()."""

    @pytest.mark.parametrize("policy", list(FitPolicy))
    @pytest.mark.parametrize("target", [Rect(100, 100), Rect(1500, 500), Rect(17, 31)])
    def test_surface_is_exact_target(self, wide_raster, policy, target):
        surface = render(TransformRequest(wide_raster, target, policy))
        assert surface.size == tuple(target)
        assert surface.mode == "RGB"

    def test_fit_within_letterboxes_with_background(self, wide_raster):
        surface = render(TransformRequest(wide_raster, Rect(100, 100), FitPolicy.FIT_WITHIN))
        assert surface.getpixel((50, 10)) == WHITE
        assert surface.getpixel((50, 90)) == WHITE
        assert surface.getpixel((10, 50)) == RED
        assert surface.getpixel((90, 50)) == BLUE

    def test_custom_background(self, wide_raster):
        surface = render(TransformRequest(
            wide_raster, Rect(100, 100), FitPolicy.FIT_WITHIN, background="#102030"))
        assert surface.getpixel((50, 5)) == (16, 32, 48)

    def test_crop_to_fill_covers_canvas(self, wide_raster):
        surface = render(TransformRequest(wide_raster, Rect(100, 100), FitPolicy.CROP_TO_FILL))
        assert surface.getpixel((10, 50)) == RED
        assert surface.getpixel((90, 50)) == BLUE
        colors = {color for _, color in surface.getcolors(maxcolors=100000)}
        assert WHITE not in colors

    def test_transparent_source_shows_background(self):
        raster = RasterImage.from_pil(Image.new("RGBA", (20, 20), (255, 0, 0, 0)))
        surface = render(TransformRequest(raster, Rect(10, 10), background=(0, 0, 0)))
        assert surface.getcolors() == [(100, (0, 0, 0))]

    def test_source_not_mutated(self, wide_raster):
        before = wide_raster.image.tobytes()
        render(TransformRequest(wide_raster, Rect(33, 77), FitPolicy.CROP_TO_FILL))
        assert wide_raster.image.tobytes() == before
        assert wide_raster.image.size == (400, 200)

    def test_explicit_placement(self, wide_raster):
        placement = full_placement(wide_raster.size, Rect(40, 40))
        surface = render(TransformRequest(wide_raster, Rect(40, 40)), placement)
        assert surface.getpixel((2, 20)) == RED
        assert surface.getpixel((37, 20)) == BLUE

    def test_deterministic(self, wide_raster):
        request = TransformRequest(wide_raster, Rect(123, 45), FitPolicy.FIT_WITHIN)
        assert render(request).tobytes() == render(request).tobytes()

    def test_zero_target(self, wide_raster):
        with pytest.raises(GeometryError):
            render(TransformRequest(wide_raster, Rect(0, 10)))


class TestParseColor:
    """Tests for background color parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("#ffffff", WHITE),
        ("#000", (0, 0, 0)),
        ("red", RED),
        ((1, 2, 3), (1, 2, 3)),
        ((1, 2, 3, 0), (1, 2, 3)),
        ("rgb(0, 0, 255)", BLUE),
    ])
    def test_valid(self, value, expected):
        assert parse_color(value) == expected

    @pytest.mark.parametrize("value", ["#zzzzzz", "not-a-color", (1, 2), (0, 0, 256), (True, 0, 0)])
    def test_invalid(self, value):
        with pytest.raises(InvalidRequestError):
            parse_color(value)
