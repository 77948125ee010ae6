"""
Command-line entry point.

Extracts distinct slides from a presentation recording, or from every
video in a folder when ``--batch`` is given.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from slidextract import __version__
from slidextract.application.dto.extraction_request import ExtractionRequest
from slidextract.core.exceptions import ConfigurationError, SlidextractError
from slidextract.core.value_objects.image_format import ImageFormat
from slidextract.infrastructure.config import Settings, get_settings
from slidextract.infrastructure.container import ApplicationContainer
from slidextract.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    ext = settings.extraction
    parser = argparse.ArgumentParser(
        prog="slidextract",
        description="Extract distinct slides from presentation video recordings.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slidextract -i lecture.mp4
  slidextract -i lecture.mp4 -t 1 -d 800 -f png
  slidextract -i recordings/ -b -m -x 50
        """,
    )
    parser.add_argument("--version", action="version", version=f"slidextract {__version__}")
    parser.add_argument("-i", "--path", required=True, help="Path to video (or folder with --batch)")
    parser.add_argument(
        "-t", "--interval",
        type=float,
        default=ext.interval_seconds,
        help=f"Seconds between sampled frames (default: {ext.interval_seconds})",
    )
    parser.add_argument(
        "-d", "--threshold",
        type=int,
        default=ext.threshold,
        help=f"Distance at which two frames count as different (default: {ext.threshold})",
    )
    parser.add_argument(
        "-m", "--in-memory",
        action="store_true",
        help="Process frames in memory. Forces single-threaded extraction.",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=ext.workers,
        help=f"Number of parallel extraction workers (default: {ext.workers})",
    )
    parser.add_argument(
        "-x", "--max-frames",
        type=int,
        default=ext.max_frames,
        help=f"[in-memory only] Frames held in memory at a time (default: {ext.max_frames})",
    )
    parser.add_argument(
        "-f", "--format",
        default=ext.image_format,
        help="Output slide format: bmp (fastest), png (slowest) or jpg/jpeg "
             f"(default: {ext.image_format})",
    )
    parser.add_argument(
        "-b", "--batch",
        action="store_true",
        help="Treat --path as a folder of videos",
    )
    parser.add_argument(
        "-o", "--output",
        default=settings.output.root,
        help=f"Output root directory (default: {settings.output.root})",
    )
    parser.add_argument(
        "--normalization",
        choices=("raw", "pixel"),
        default=ext.normalization,
        help="Distance normalization; pixel keeps thresholds resolution independent",
    )
    parser.add_argument("--log-level", default=settings.logging.level, help="Logging level")
    parser.add_argument(
        "--report",
        metavar="FILE",
        help="Write a JSON summary of every processed video to FILE",
    )
    return parser


def _load_settings() -> Settings:
    """Read settings, reporting a bad environment the way argparse reports bad flags."""
    try:
        return get_settings()
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        argparse.ArgumentParser(prog="slidextract").error(
            f"invalid configuration in environment ({fields}): {exc.errors()[0]['msg']}"
        )


def main(argv: Optional[list[str]] = None) -> int:
    settings = _load_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    # Format is checked before anything is created on disk.
    try:
        ImageFormat.parse(args.format)
    except ConfigurationError as exc:
        parser.error(str(exc))

    setup_logging(args.log_level, settings.logging.file or None)

    request = ExtractionRequest(
        path=args.path,
        output_root=args.output,
        interval_seconds=args.interval,
        threshold=args.threshold,
        workers=args.workers,
        in_memory=args.in_memory,
        max_frames=args.max_frames,
        image_format=args.format,
        normalization=args.normalization,
        batch=args.batch,
    )

    orchestrator = ApplicationContainer(settings).batch_orchestrator()
    try:
        batch = asyncio.run(orchestrator.execute(request))
    except ConfigurationError as exc:
        parser.error(str(exc))
    except SlidextractError as exc:
        logger.error("%s", exc)
        return 1

    if args.report:
        report = Path(args.report)
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(json.dumps(batch.to_dict(), indent=2), encoding="utf-8")
        logger.info("Wrote summary to %s", report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
