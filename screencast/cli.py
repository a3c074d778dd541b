"""
Screencast Command Line

Usage:
    screencast record --file-name demo --resolution 1280x720 --duration 10
    screencast record --audio --audio-source "Microphone (USB)" --volume 1.5
    screencast devices

record runs until Ctrl+C (or --duration), devices prints audio inputs.
"""

import argparse
import logging
import sys
import threading
from typing import List, Optional

from config.settings import (
    DEFAULT_CODEC,
    DEFAULT_FILE_NAME,
    DEFAULT_FORMAT,
    DEFAULT_FRAME_RATE,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PRESET,
    DEFAULT_RESOLUTION,
    DEFAULT_VOLUME,
)
from screencast.constants import ALLOWED_CODECS, ALLOWED_PRESETS
from screencast.controllers.device_enumerator import list_audio_devices
from screencast.controllers.screen_recorder import ScreenRecorder
from screencast.interfaces.capture_backend_interface import RecordingError
from screencast.models.recorder_config import RecorderConfig
from screencast.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screencast",
        description="Record the screen with FFmpeg",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    record = subparsers.add_parser("record", help="Record until Ctrl+C or --duration")
    record.add_argument("--output-path", default=DEFAULT_OUTPUT_PATH)
    record.add_argument("--file-name", default=DEFAULT_FILE_NAME)
    record.add_argument("--format", default=DEFAULT_FORMAT)
    record.add_argument("--frame-rate", type=int, default=DEFAULT_FRAME_RATE)
    record.add_argument("--codec", choices=ALLOWED_CODECS, default=DEFAULT_CODEC)
    record.add_argument("--preset", choices=ALLOWED_PRESETS, default=DEFAULT_PRESET)
    record.add_argument("--resolution", default=DEFAULT_RESOLUTION)
    record.add_argument("--video-source", default=None)
    record.add_argument("--audio", dest="record_audio", action="store_true")
    record.add_argument("--audio-source", default=None)
    record.add_argument("--volume", type=float, default=DEFAULT_VOLUME)
    record.add_argument("--duration", type=float, default=None, help="Seconds")
    record.add_argument("--no-uuid", dest="include_uuid", action="store_false")
    record.add_argument("--no-overwrite", dest="overwrite", action="store_false")
    record.add_argument("--verbose", action="store_true")
    record.add_argument(
        "extra_args",
        nargs=argparse.REMAINDER,
        help="Extra FFmpeg arguments (after --)",
    )

    subparsers.add_parser("devices", help="List audio input devices")

    return parser


def config_from_args(args: argparse.Namespace) -> RecorderConfig:
    extra_args = [arg for arg in args.extra_args if arg != "--"]
    return RecorderConfig(
        output_path=args.output_path,
        file_name=args.file_name,
        format=args.format,
        frame_rate=args.frame_rate,
        codec=args.codec,
        preset=args.preset,
        resolution=args.resolution,
        video_source=args.video_source,
        record_audio=args.record_audio,
        audio_source=args.audio_source,
        volume=args.volume,
        duration=args.duration,
        include_uuid=args.include_uuid,
        overwrite=args.overwrite,
        verbose=args.verbose,
        extra_args=extra_args,
    )


def run_record(args: argparse.Namespace) -> int:
    recorder = ScreenRecorder(config_from_args(args))
    finished = threading.Event()
    failures: List[RecordingError] = []

    def on_error(error: RecordingError) -> None:
        failures.append(error)
        print(f"Error: {error}", file=sys.stderr)

    recorder.on_error = on_error
    recorder.on_stop = finished.set

    if not recorder.start():
        return 1

    print(f"Recording to {recorder.get_output_file()} (Ctrl+C to stop)")
    try:
        while recorder.is_recording and not finished.wait(0.5):
            pass
    except KeyboardInterrupt:
        print("Stopping...")
        recorder.stop()
    finally:
        recorder.cleanup()

    return 1 if failures else 0


def run_devices(args: argparse.Namespace) -> int:
    for device in list_audio_devices():
        print(device)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level.upper(), log_dir=None)

    try:
        if args.command == "record":
            return run_record(args)
        return run_devices(args)
    except RecordingError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
