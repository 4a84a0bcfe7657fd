#!/usr/bin/env python3
"""
Upload Video - Command-line Tool

Validates local video files, uploads them to remote storage with progress
in the log, writes the catalog record and optionally requests processing.

Usage:
    python scripts/upload_video.py clip.mp4                    # Dry run - validate only
    python scripts/upload_video.py clip.mp4 --upload           # Upload and finalize
    python scripts/upload_video.py a.mp4 b.mov --upload --process --prompt "crop to 9:16"
    python scripts/upload_video.py clip.mp4 --upload --mock    # No network, in-memory catalog

Safety:
    - Dry run by default (requires --upload to actually upload)
    - Only video/* files are accepted
    - Continues on errors (one failed upload won't stop the rest)
    - A failed finalize is retried once with the same video id
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import DEFAULT_OWNER_ID, VIDEO_MIME_PREFIX
from core.logging_setup import setup_logging
from processing import create_processing_client
from upload import UploadController, UploadStatus, create_coordinator
from upload.factory import create_credentials
from upload.models.media_asset import MediaAsset

logger = logging.getLogger(__name__)


def validate_video_file(path: Path) -> bool:
    """
    Check that a file exists and looks like a video.

    Returns:
        True if the file can be uploaded
    """
    asset = MediaAsset.from_path(str(path))

    if not asset.exists():
        logger.warning(f"  ✗ {path.name} (file does not exist)")
        return False

    if not asset.mime_type.startswith(VIDEO_MIME_PREFIX):
        logger.warning(f"  ✗ {path.name} (not a video: {asset.mime_type or 'unknown'})")
        return False

    logger.info(
        f"  ✓ {path.name} ({asset.mime_type}, "
        f"{asset.size_bytes / (1024 * 1024):.2f} MB)",
    )
    return True


def log_progress(snapshot) -> None:
    """Progress bar in the log"""
    filled = int(snapshot.progress_percent // 5)
    bar = "#" * filled + "-" * (20 - filled)
    logger.info(f"  [{bar}] {snapshot.progress_percent:5.1f}%")


def upload_one(
    controller: UploadController,
    path: Path,
    process: bool,
    prompt: str,
) -> bool:
    """
    Upload a single video file.

    Returns:
        True if the record was persisted
    """
    result = controller.upload_video(
        str(path),
        request_processing=process,
        prompt=prompt,
    )

    if result.status == UploadStatus.FINALIZE_ERROR:
        logger.warning("  Metadata write failed, retrying with the same video id")
        result = controller.retry_last()

    if not result.success:
        logger.error(f"  ❌ FAILED: {result.error_message} ({result.status.value})")
        return False

    logger.info(f"  ✅ SUCCESS: {result.video_id}")
    logger.info(f"  URL: {result.download_url}")
    logger.info(f"  Upload duration: {result.upload_duration:.1f}s")
    if process:
        logger.info(
            f"  Processing: {'requested' if result.processing_requested else 'NOT requested'}",
        )
    return True


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Upload local videos and record them in the catalog",
        epilog="""
Examples:
  %(prog)s clip.mp4                      # Dry run - validate only
  %(prog)s clip.mp4 --upload             # Upload and finalize
  %(prog)s clip.mp4 --upload --process   # ... and request processing
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("files", nargs="+", help="Video files to upload")

    parser.add_argument(
        "--upload",
        action="store_true",
        help="Actually upload videos (default is dry run)",
    )

    parser.add_argument(
        "--process",
        action="store_true",
        help="Request server-side processing after each upload",
    )

    parser.add_argument(
        "--prompt",
        type=str,
        default="",
        help="Instruction forwarded with the processing request",
    )

    parser.add_argument(
        "--owner",
        type=str,
        default=DEFAULT_OWNER_ID,
        help="Owner id for the uploads (default: DEFAULT_OWNER_ID from .env)",
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock transport, credentials and catalog (no network)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path (default: LOG_DIR/videofeed.log, falls back to ./logs)",
    )

    args = parser.parse_args()
    setup_logging(level=logging.INFO, log_file=args.log_file)

    # Banner
    logger.info("=" * 70)
    logger.info("Upload Video")
    logger.info("=" * 70)
    logger.info(f"Mode: {'UPLOAD' if args.upload else 'DRY RUN'}")
    logger.info(f"Owner: {args.owner or '(not set)'}")
    logger.info(f"Request processing: {args.process}")
    logger.info("=" * 70)

    logger.info("📋 Validating files...")
    valid = [Path(f) for f in args.files if validate_video_file(Path(f))]

    if not valid:
        logger.error("❌ No valid videos to upload")
        return 1

    if not args.upload:
        logger.info("=" * 70)
        logger.info("DRY RUN MODE - No uploads performed")
        logger.info("Run with --upload to actually upload these videos")
        logger.info("=" * 70)
        return 0

    if not args.owner:
        logger.error("❌ No owner id - pass --owner or set DEFAULT_OWNER_ID")
        return 1

    logger.info("🚀 Initializing upload controller...")
    try:
        coordinator = create_coordinator(owner_id=args.owner, force_mock=args.mock)
        processing_client = None
        if args.process:
            processing_client = create_processing_client(
                force_mock=args.mock,
                credentials=create_credentials(force_mock=args.mock),
            )
        controller = UploadController(
            coordinator=coordinator,
            processing_client=processing_client,
        )
        controller.on_progress = log_progress
    except Exception as e:
        logger.error(f"❌ Failed to initialize uploader: {e}", exc_info=True)
        return 1

    results = {"success": 0, "failed": 0}

    for i, path in enumerate(valid, 1):
        logger.info(f"\n[{i}/{len(valid)}] Uploading: {path.name}")
        logger.info("-" * 70)

        if upload_one(controller, path, args.process, args.prompt):
            results["success"] += 1
        else:
            results["failed"] += 1

    logger.info("=" * 70)
    logger.info(f"✅ Uploaded: {results['success']}   ❌ Failed: {results['failed']}")
    logger.info("=" * 70)

    controller.cleanup()
    return 0 if results["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
