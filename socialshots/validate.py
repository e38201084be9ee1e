#!/usr/bin/env python3
"""Validate generated assets against the preset catalog."""

from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .presets import match_filename

ALLOWED_FORMATS = {".png", ".jpg", ".jpeg", ".webp"}


@dataclass
class ValidationReport:
    valid: int = 0
    warnings: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors


def validate_outputs(input_dir: str) -> ValidationReport:
    """Check every generated image has the size its filename promises."""
    input_path = Path(input_dir)
    report = ValidationReport()

    if not input_path.exists():
        print(f"❌ Directory not found: {input_dir}")
        report.errors.append(f"Directory not found: {input_dir}")
        return report

    print(f"🔍 Validating assets in {input_dir}")
    print("=" * 50)

    images = sorted(p for p in input_path.rglob("*") if p.suffix.lower() in ALLOWED_FORMATS)
    if not images:
        print("❌ No images found")
        return report

    print(f"Found {len(images)} images\n")

    for img_path in images:
        rel = img_path.relative_to(input_path)
        match = match_filename(img_path.stem)
        if match is None:
            report.warnings.append(f"⚠️  {rel}: not a catalog filename")
            continue
        preset, expected = match

        try:
            with Image.open(img_path) as img:
                w, h = img.size
        except (UnidentifiedImageError, OSError) as exc:
            report.errors.append(f"❌ {rel}: unreadable ({exc})")
            continue

        if (w, h) != tuple(expected):
            report.errors.append(f"❌ {rel}: {w}×{h}, expected {expected.width}×{expected.height}")
            continue

        label = preset.label if preset else "fallback"
        report.valid += 1
        print(f"  ✅ {rel} — {w}×{h} ({label})")

    print()

    if report.warnings:
        print("WARNINGS:")
        for w in report.warnings:
            print(f"  {w}")
        print()

    if report.errors:
        print("ERRORS:")
        for e in report.errors:
            print(f"  {e}")
        print()

    print(f"Summary: {report.valid} valid, {len(report.warnings)} warnings, {len(report.errors)} errors")
    if report.passed:
        print("✅ All assets match their preset sizes!")
    return report
