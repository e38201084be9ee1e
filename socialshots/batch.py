#!/usr/bin/env python3
"""Batch encoder - decode, transform and encode a list of images.

Every image is attempted independently: a corrupt input or a codec failure
is recorded as a failed result and never stops the rest of the batch.
Results come back in input order regardless of which worker finishes first.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

from .codec import decode, encode
from .compositor import DEFAULT_BACKGROUND, TransformRequest, parse_color, render
from .errors import ImageTransformError, InvalidRequestError
from .geometry import Rect
from .jobs import IconPresetRequest, SourceImage, TransformKind

CANCELLED = "cancelled"


class BatchState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    # run() raised before every item was attempted
    ABORTED = "aborted"


@dataclass(frozen=True)
class BatchResult:
    index: int
    source_name: str
    output_name: Optional[str] = None
    data: Optional[bytes] = None
    size: Optional[Rect] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, index: int, source_name: str, reason: str,
               output_name: Optional[str] = None) -> "BatchResult":
        return cls(index=index, source_name=source_name, output_name=output_name, error=reason)


def unique_names(results: list) -> list:
    """Suffix clashing output names with _1, _2, ... (a.png + a.jpg -> a.webp, a_1.webp)."""
    taken = set()
    unique = []
    for result in results:
        name = result.output_name
        if name is not None:
            stem, dot, ext = name.rpartition(".")
            if not dot:
                stem, ext = name, ""
            n = 0
            while name in taken:
                n += 1
                name = f"{stem}_{n}{dot}{ext}"
            taken.add(name)
            if name != result.output_name:
                result = replace(result, output_name=name)
        unique.append(result)
    return unique


def summarize(results: Iterable[BatchResult]) -> tuple:
    """Return (succeeded, failed) counts."""
    results = list(results)
    succeeded = sum(1 for r in results if r.ok)
    return succeeded, len(results) - succeeded


class BatchEncoder:
    def __init__(
        self,
        request: TransformKind,
        background=DEFAULT_BACKGROUND,
        workers: Optional[int] = None,
        verbose: bool = False,
    ):
        self.request = request
        self.background = background
        self.workers = workers
        self.verbose = verbose
        self.state = BatchState.PENDING
        self._cancel = threading.Event()
        self._targets = None
        self._prefix = False

    def log(self, msg: str):
        print(msg)

    def debug(self, msg: str):
        if self.verbose:
            print(f"  [debug] {msg}")

    def cancel(self):
        """Stop starting new items. Items already running finish normally."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def validate(self):
        """Check the request before anything is decoded. Raises ValidationError."""
        self.request.validate()
        parse_color(self.background)
        if self.workers is not None and (
            isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1
        ):
            raise InvalidRequestError(f"Workers must be a positive integer, got {self.workers!r}")

    def run(self, images: Iterable) -> list:
        """Process every image and return all results, in input order."""
        if self.state is not BatchState.PENDING:
            raise RuntimeError(f"Batch already {self.state.value}")

        self.validate()
        sources = [SourceImage(*item) for item in images]
        if isinstance(self.request, IconPresetRequest):
            self._targets = self.request.targets(log=self.log)
            self._prefix = len(sources) > 1

        self.state = BatchState.RUNNING
        self.log(f"📐 {self.request.describe()} for {len(sources)} image(s)")

        try:
            per_source = self._collect(sources)
        except BaseException:
            self.state = BatchState.ABORTED
            raise

        results = unique_names([result for group in per_source for result in group])
        self.state = BatchState.COMPLETED

        succeeded, failed = summarize(results)
        if failed:
            self.log(f"\n⚠️  {succeeded} succeeded, {failed} failed")
        else:
            self.log(f"\n🎉 {succeeded} image(s) generated")
        return results

    def _collect(self, sources: list) -> list:
        per_source = [[] for _ in sources]
        if not sources:
            return per_source

        workers = min(self.workers or os.cpu_count() or 1, len(sources))
        self.debug(f"{workers} worker(s)")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            try:
                futures = [pool.submit(self._process, i, src) for i, src in enumerate(sources)]
                for i, future in enumerate(futures):
                    per_source[i] = future.result()
            except KeyboardInterrupt:
                # Queued items are dropped; in-flight ones finish before re-raising
                self.log("\n⏹️  Interrupted - not starting remaining images")
                self.cancel()
                pool.shutdown(wait=True, cancel_futures=True)
                raise
        return per_source

    def _plan(self, source: SourceImage, raster) -> list:
        if isinstance(self.request, IconPresetRequest):
            return self.request.plan(source, raster, prefix=self._prefix, targets=self._targets)
        return self.request.plan(source, raster)

    def _process(self, index: int, source: SourceImage) -> list:
        if self.cancelled:
            self.debug(f"skipped {source.filename}")
            return [BatchResult.failed(index, source.filename, CANCELLED)]

        try:
            raster = decode(source.data, source.mime_type)
            outputs = self._plan(source, raster)
        except ImageTransformError as exc:
            self.log(f"  ❌ {source.filename}: {exc}")
            return [BatchResult.failed(index, source.filename, str(exc))]

        self.debug(f"{source.filename}: {raster.width}x{raster.height}, {len(outputs)} output(s)")
        results = []
        for output in outputs:
            try:
                transform = TransformRequest(raster, output.target, background=self.background)
                surface = render(transform, output.placement)
                data = encode(surface, output.spec)
            except ImageTransformError as exc:
                self.log(f"  ❌ {output.name}: {exc}")
                results.append(BatchResult.failed(index, source.filename, str(exc), output.name))
                continue
            self.log(f"  ✅ {output.name} ({output.target})")
            results.append(BatchResult(
                index=index,
                source_name=source.filename,
                output_name=output.name,
                data=data,
                size=output.target,
            ))
        return results


def transform_batch(images: Iterable, request: TransformKind, **options) -> list:
    """Run one batch: ``images`` is a list of (filename, bytes, mime_type)."""
    return BatchEncoder(request, **options).run(images)
