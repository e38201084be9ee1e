"""Tests for the target catalog."""
import pytest

from socialshots.errors import InvalidDimensionError, UnknownPresetError
from socialshots.geometry import FitPolicy, Rect
from socialshots.presets import (
    FALLBACK_SIZE,
    FAMILIES,
    PRESETS,
    PresetId,
    get_preset,
    match_filename,
    resolve_targets,
)


class TestCatalog:
    """Tests for the static preset table."""

    def test_every_id_has_a_preset(self):
        assert set(PRESETS) == set(PresetId)

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            PRESETS[PresetId.FAVICON] = None

    def test_square_presets_crop(self):
        for preset in PRESETS.values():
            if preset.id is PresetId.CUSTOM:
                continue
            square = all(s.width == s.height for s in preset.sizes)
            assert preset.policy is FitPolicy.for_square(square), preset.id

    def test_families_cover_catalog(self):
        listed = [pid for ids in FAMILIES.values() for pid in ids]
        assert sorted(listed) == sorted(PRESETS)
        assert FAMILIES["website"] == (PresetId.FAVICON, PresetId.APPLE, PresetId.ANDROID)

    def test_get_preset(self):
        preset = get_preset("youtube-thumbnail")
        assert preset.target == Rect(1280, 720)
        assert preset.policy is FitPolicy.FIT_WITHIN
        assert get_preset(PresetId.YOUTUBE_THUMBNAIL) is preset

    def test_unknown_preset(self):
        with pytest.raises(UnknownPresetError) as exc_info:
            get_preset("myspace-profile")
        assert exc_info.value.preset_id == "myspace-profile"


class TestResolveTargets:
    """Tests for resolve_targets()."""

    def test_favicon_family(self):
        targets = resolve_targets("favicon")
        assert [t.rect for t in targets] == [Rect(16, 16), Rect(32, 32), Rect(48, 48)]
        assert [t.stem for t in targets] == ["favicon_16x16", "favicon_32x32", "favicon_48x48"]
        assert all(t.policy is FitPolicy.CROP_TO_FILL for t in targets)

    def test_fixed_name(self):
        (target,) = resolve_targets("apple")
        assert target == (Rect(180, 180), FitPolicy.CROP_TO_FILL, "apple-touch-icon")

    def test_banner(self):
        (target,) = resolve_targets("twitter-header")
        assert target == (Rect(1500, 500), FitPolicy.FIT_WITHIN, "twitter_header_image")

    def test_unknown_falls_back(self):
        messages = []
        (target,) = resolve_targets("nope", log=messages.append)
        assert target == (FALLBACK_SIZE, FitPolicy.FIT_WITHIN, "image_256x256")
        assert messages and "nope" in messages[0]

    @pytest.mark.parametrize("size", [64, "64"])
    def test_custom(self, size):
        (target,) = resolve_targets("custom", size)
        assert target.rect == Rect(64, 64)
        assert target.stem == "custom_64x64"

    @pytest.mark.parametrize("size", ["0", None, "big", -3])
    def test_custom_invalid_size(self, size):
        with pytest.raises(InvalidDimensionError):
            resolve_targets("custom", size)

    def test_deterministic(self):
        assert resolve_targets("favicon") == resolve_targets("favicon")


class TestMatchFilename:
    """Tests for reverse filename lookup."""

    def test_fixed_name(self):
        preset, size = match_filename("twitch_offline_screen")
        assert preset.id is PresetId.TWITCH_OFFLINE
        assert size == Rect(1920, 1080)

    def test_sized_name(self):
        preset, size = match_filename("favicon_32x32")
        assert preset.id is PresetId.FAVICON
        assert size == Rect(32, 32)

    def test_prefixed_name(self):
        preset, size = match_filename("logo_discord_server_icon")
        assert preset.id is PresetId.DISCORD_SERVER
        assert size == Rect(512, 512)

    def test_fallback_name(self):
        assert match_filename("image_256x256") == (None, Rect(256, 256))

    def test_unrelated(self):
        assert match_filename("holiday-photo") is None
