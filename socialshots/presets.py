#!/usr/bin/env python3
"""Target catalog - social network and website asset sizes.

One table keyed by PresetId holds the size(s), fit policy and output name of
every preset, so sizes and filenames cannot drift apart.
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple, Optional

from .dimensions import parse_dimension
from .errors import UnknownPresetError
from .geometry import FitPolicy, Rect

FALLBACK_SIZE = Rect(256, 256)
FALLBACK_TEMPLATE = "image_{width}x{height}"


class PresetId(str, Enum):
    # Website icons
    FAVICON = "favicon"
    APPLE = "apple"
    ANDROID = "android"
    # YouTube
    YOUTUBE_PROFILE = "youtube-profile"
    YOUTUBE_CHANNEL = "youtube-channel"
    YOUTUBE_THUMBNAIL = "youtube-thumbnail"
    YOUTUBE_COMMUNITY = "youtube-community"
    # Twitter/X
    TWITTER_PROFILE = "twitter-profile"
    TWITTER_HEADER = "twitter-header"
    # Facebook
    FACEBOOK_PROFILE = "facebook-profile"
    FACEBOOK_COVER = "facebook-cover"
    FACEBOOK_POST = "facebook-post"
    # Instagram
    INSTAGRAM_PROFILE = "instagram-profile"
    INSTAGRAM_STORY = "instagram-story"
    INSTAGRAM_POST = "instagram-post"
    INSTAGRAM_REELS = "instagram-reels"
    # LinkedIn
    LINKEDIN_PROFILE = "linkedin-profile"
    LINKEDIN_COVER = "linkedin-cover"
    LINKEDIN_POST = "linkedin-post"
    # Discord
    DISCORD_SERVER = "discord-server"
    DISCORD_BANNER = "discord-banner"
    # Twitch
    TWITCH_PROFILE = "twitch-profile"
    TWITCH_BANNER = "twitch-banner"
    TWITCH_OFFLINE = "twitch-offline"
    # TikTok
    TIKTOK_PROFILE = "tiktok-profile"
    # Size given by the user
    CUSTOM = "custom"


@dataclass(frozen=True)
class Preset:
    id: PresetId
    label: str
    family: str
    sizes: tuple
    policy: FitPolicy
    filename_template: str

    @property
    def target(self) -> Rect:
        return self.sizes[0]

    def filename(self, size: Optional[Rect] = None) -> str:
        """Output stem, e.g. favicon_32x32 or apple-touch-icon."""
        size = size or self.target
        return self.filename_template.format(width=size.width, height=size.height)


class ResolvedTarget(NamedTuple):
    rect: Rect
    policy: FitPolicy
    stem: str


def _preset(pid, label, family, sizes, square, template):
    return pid, Preset(
        id=pid,
        label=label,
        family=family,
        sizes=tuple(Rect(w, h) for w, h in sizes),
        policy=FitPolicy.for_square(square),
        filename_template=template,
    )


PRESETS = MappingProxyType(dict([
    _preset(PresetId.FAVICON, "Favicon", "website", [(16, 16), (32, 32), (48, 48)], True, "favicon_{width}x{height}"),
    _preset(PresetId.APPLE, "Apple touch icon", "website", [(180, 180)], True, "apple-touch-icon"),
    _preset(PresetId.ANDROID, "Android icon", "website", [(192, 192)], True, "android-icon"),

    _preset(PresetId.YOUTUBE_PROFILE, "YouTube profile image", "youtube", [(800, 800)], True, "youtube_profile_image"),
    _preset(PresetId.YOUTUBE_CHANNEL, "YouTube channel art", "youtube", [(2560, 1440)], False, "youtube_channel_art"),
    _preset(PresetId.YOUTUBE_THUMBNAIL, "YouTube thumbnail", "youtube", [(1280, 720)], False, "youtube_thumbnail"),
    _preset(PresetId.YOUTUBE_COMMUNITY, "YouTube community post", "youtube", [(1200, 675)], False, "youtube_community_post"),

    _preset(PresetId.TWITTER_PROFILE, "Twitter/X profile image", "twitter", [(400, 400)], True, "twitter_profile_image"),
    _preset(PresetId.TWITTER_HEADER, "Twitter/X header", "twitter", [(1500, 500)], False, "twitter_header_image"),

    _preset(PresetId.FACEBOOK_PROFILE, "Facebook profile picture", "facebook", [(170, 170)], True, "facebook_profile_picture"),
    _preset(PresetId.FACEBOOK_COVER, "Facebook cover photo", "facebook", [(820, 312)], False, "facebook_cover_photo"),
    _preset(PresetId.FACEBOOK_POST, "Facebook post image", "facebook", [(1200, 630)], False, "facebook_post_image"),

    _preset(PresetId.INSTAGRAM_PROFILE, "Instagram profile picture", "instagram", [(320, 320)], True, "instagram_profile_picture"),
    _preset(PresetId.INSTAGRAM_STORY, "Instagram story", "instagram", [(1080, 1920)], False, "instagram_story"),
    _preset(PresetId.INSTAGRAM_POST, "Instagram post", "instagram", [(1080, 1080)], True, "instagram_post"),
    _preset(PresetId.INSTAGRAM_REELS, "Instagram reels", "instagram", [(1080, 1920)], False, "instagram_reels"),

    _preset(PresetId.LINKEDIN_PROFILE, "LinkedIn profile photo", "linkedin", [(400, 400)], True, "linkedin_profile_photo"),
    _preset(PresetId.LINKEDIN_COVER, "LinkedIn cover photo", "linkedin", [(1584, 396)], False, "linkedin_cover_photo"),
    _preset(PresetId.LINKEDIN_POST, "LinkedIn post image", "linkedin", [(1200, 627)], False, "linkedin_post_image"),

    _preset(PresetId.DISCORD_SERVER, "Discord server icon", "discord", [(512, 512)], True, "discord_server_icon"),
    _preset(PresetId.DISCORD_BANNER, "Discord server banner", "discord", [(960, 540)], False, "discord_server_banner"),

    _preset(PresetId.TWITCH_PROFILE, "Twitch profile image", "twitch", [(256, 256)], True, "twitch_profile_image"),
    _preset(PresetId.TWITCH_BANNER, "Twitch banner", "twitch", [(1920, 480)], False, "twitch_banner"),
    _preset(PresetId.TWITCH_OFFLINE, "Twitch offline screen", "twitch", [(1920, 1080)], False, "twitch_offline_screen"),

    _preset(PresetId.TIKTOK_PROFILE, "TikTok profile picture", "tiktok", [(200, 200)], True, "tiktok_profile_picture"),

    # Size comes from the request; FALLBACK_SIZE is only a placeholder
    _preset(PresetId.CUSTOM, "Custom square", "custom", [tuple(FALLBACK_SIZE)], False, "custom_{width}x{height}"),
]))

FAMILIES = MappingProxyType({
    family: tuple(p.id for p in PRESETS.values() if p.family == family)
    for family in dict.fromkeys(p.family for p in PRESETS.values())
})


def get_preset(preset_id) -> Preset:
    """Look up a preset by id ("favicon", PresetId.FAVICON, ...)."""
    try:
        return PRESETS[PresetId(preset_id)]
    except ValueError:
        raise UnknownPresetError(str(preset_id)) from None


def resolve_targets(preset_id, custom_size=None, log=None) -> list:
    """Every (rect, policy, filename stem) a preset asks for.

    ``custom`` takes its square size from ``custom_size`` and raises
    InvalidDimensionError for a bad value. Unknown ids fall back to a
    256x256 letterboxed image instead of failing.
    """
    try:
        preset = get_preset(preset_id)
    except UnknownPresetError as exc:
        if log:
            log(f"  ⚠️  {exc} - using {FALLBACK_SIZE} fallback")
        return [ResolvedTarget(
            FALLBACK_SIZE,
            FitPolicy.FIT_WITHIN,
            FALLBACK_TEMPLATE.format(width=FALLBACK_SIZE.width, height=FALLBACK_SIZE.height),
        )]

    if preset.id is PresetId.CUSTOM:
        side = parse_dimension(custom_size, "icon size")
        size = Rect(side, side)
        return [ResolvedTarget(size, preset.policy, preset.filename(size))]

    return [ResolvedTarget(size, preset.policy, preset.filename(size)) for size in preset.sizes]


_TEMPLATE_FIELD = re.compile(r"\\\{(width|height)\\\}")


def _template_pattern(template: str):
    # Optional "<source stem>_" prefix from multi-image batches
    return re.compile("^(?:.+_)?" + _TEMPLATE_FIELD.sub(r"(?P<\1>\\d+)", re.escape(template)) + "$")


_FILENAME_PATTERNS = tuple(
    (_template_pattern(p.filename_template), p) for p in PRESETS.values()
) + ((_template_pattern(FALLBACK_TEMPLATE), None),)


def match_filename(stem: str) -> Optional[tuple]:
    """Reverse lookup: output stem -> (preset or None for fallback, expected Rect).

    Returns None when the name does not come from the catalog.
    """
    for pattern, preset in _FILENAME_PATTERNS:
        match = pattern.match(stem)
        if not match:
            continue
        fields = match.groupdict()
        if fields:
            return preset, Rect(int(fields["width"]), int(fields["height"]))
        return preset, preset.target
    return None
