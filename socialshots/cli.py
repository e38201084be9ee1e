#!/usr/bin/env python3
"""SocialShots CLI - resize, convert and generate social media images."""

import argparse
import sys
from pathlib import Path

from .batch import BatchEncoder, summarize
from .codec import ImageFormat
from .config import CONFIG_PATH, resolve_settings, write_default_config
from .errors import ValidationError
from .jobs import ConvertRequest, IconPresetRequest, ResizeRequest
from .presets import FAMILIES, PRESETS, PresetId
from .sources import collect_images, save_results


def _add_common(parser):
    parser.add_argument("--input", "-i", required=True, help="Input image or directory")
    parser.add_argument("--output", "-o", help="Output directory (default: input/<command>)")
    parser.add_argument("--config", "-c", help=f"Config file path (default: {CONFIG_PATH})")
    parser.add_argument("--workers", "-w", type=int, help="Parallel workers (default: CPU count)")
    parser.add_argument("--background", "-b", help="Background color for letterboxing (default: #ffffff)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="socialshots",
        description="Resize, convert and generate social media images"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # resize
    resize_parser = subparsers.add_parser("resize", help="Resize images to explicit dimensions")
    _add_common(resize_parser)
    resize_parser.add_argument("--width", required=True, help="Output width in pixels")
    resize_parser.add_argument("--height", required=True, help="Output height in pixels")
    resize_parser.add_argument("--keep-aspect", action="store_true", help="Derive one axis from each image's ratio")
    resize_parser.add_argument("--anchor", default="width", choices=["width", "height"],
                               help="Axis kept as given with --keep-aspect")

    # convert
    convert_parser = subparsers.add_parser("convert", help="Re-encode images to another format")
    _add_common(convert_parser)
    convert_parser.add_argument("--format", "-f", required=True, choices=[f.value for f in ImageFormat],
                                help="Output format")
    convert_parser.add_argument("--quality", "-q", type=int, default=92,
                                help="Quality 0-100 for JPEG/WEBP (ignored for PNG)")

    # icon
    icon_parser = subparsers.add_parser("icon", help="Generate icons, banners and profile images")
    _add_common(icon_parser)
    icon_parser.add_argument("--preset", "-p", required=True, help="Preset id (see `socialshots presets`)")
    icon_parser.add_argument("--size", "-s", help="Square size for --preset custom")

    # presets
    presets_parser = subparsers.add_parser("presets", help="List available presets")
    presets_parser.add_argument("--family", choices=list(FAMILIES), help="Only list one family")

    # validate
    validate_parser = subparsers.add_parser("validate", help="Check generated images match their preset sizes")
    validate_parser.add_argument("--input", "-i", required=True, help="Directory to validate")

    # init
    init_parser = subparsers.add_parser("init", help="Write a starter config file")
    init_parser.add_argument("--output", "-o", help=f"Config path (default: {CONFIG_PATH})")

    return parser


def _request_from_args(args, settings):
    if args.command == "resize":
        return ResizeRequest(
            width=args.width,
            height=args.height,
            keep_aspect=args.keep_aspect,
            anchor=args.anchor,
            quality=settings.resize_quality,
        )
    if args.command == "convert":
        return ConvertRequest(format=args.format, quality=args.quality / 100)
    return IconPresetRequest(preset_id=args.preset, custom_size=args.size)


def run_batch(args) -> int:
    settings = resolve_settings(
        {"background": args.background, "workers": args.workers, "output_dir": args.output},
        path=args.config,
    )
    request = _request_from_args(args, settings)

    input_path = Path(args.input)
    if settings.output_dir:
        output_dir = Path(settings.output_dir)
    else:
        base = input_path if input_path.is_dir() else input_path.parent
        output_dir = base / args.command

    try:
        images = collect_images(args.input)
    except FileNotFoundError as exc:
        print(f"❌ {exc}")
        return 1
    if not images:
        print(f"No images found in {args.input}")
        return 1

    engine = BatchEncoder(
        request,
        background=settings.background,
        workers=settings.workers,
        verbose=args.verbose,
    )
    try:
        results = engine.run(images)
    except ValidationError as exc:
        print(f"❌ {exc}")
        return 1

    written = save_results(results, output_dir)
    print(f"💾 {len(written)} file(s) saved to {output_dir}/")

    _, failed = summarize(results)
    return 2 if failed else 0


def list_presets(family=None):
    families = [family] if family else list(FAMILIES)
    for name in families:
        print(f"\n{name}")
        for preset_id in FAMILIES[name]:
            preset = PRESETS[preset_id]
            if preset.id is PresetId.CUSTOM:
                sizes = "N×N (--size)"
            else:
                sizes = ", ".join(f"{s.width}×{s.height}" for s in preset.sizes)
            print(f"  {preset.id.value:<20} {sizes:<22} {preset.policy.value:<5} {preset.label}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command in ("resize", "convert", "icon"):
        sys.exit(run_batch(args))

    elif args.command == "presets":
        list_presets(args.family)

    elif args.command == "validate":
        from .validate import validate_outputs
        report = validate_outputs(args.input)
        sys.exit(0 if report.passed else 1)

    elif args.command == "init":
        path = write_default_config(args.output)
        print(f"✅ Config written to {path}")


if __name__ == "__main__":
    main()
