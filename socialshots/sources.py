#!/usr/bin/env python3
"""Acquisition and presentation - the file-system edges around the engine.

The engine never touches disk: these helpers read inputs into SourceImage
tuples and write successful results back out.
"""

import mimetypes
from pathlib import Path

from .jobs import SourceImage

# Missing from the platform type map on some systems
mimetypes.add_type("image/webp", ".webp")


def guess_mime(path: Path):
    mime, _ = mimetypes.guess_type(path.name)
    return mime


def collect_images(input_path: str) -> list:
    """Read one image file, or every image file in a directory (sorted).

    Files whose type is not image/* are skipped here so the engine only ever
    sees raster inputs.
    """
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {input_path}")

    files = [path] if path.is_file() else sorted(p for p in path.iterdir() if p.is_file())
    images = []
    for file in files:
        mime = guess_mime(file)
        if not mime or not mime.startswith("image/"):
            continue
        images.append(SourceImage(file.name, file.read_bytes(), mime))
    return images


def save_results(results, output_dir: str) -> list:
    """Write every successful result to ``output_dir``; returns written paths."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    written = []
    for result in results:
        if not result.ok:
            continue
        target = out / result.output_name
        target.write_bytes(result.data)
        written.append(target)
    return written
