"""
Command-line entrypoint for the CDN uploader.

Modes (mutually exclusive):
    (no flags)          capture a screenshot region and upload it
    -u / --upload SRC   upload a local path, file:// URL or http(s) URL
    -c / --clipboard    upload the clipboard content

Exit codes:
    0  upload succeeded, or the user cancelled
    1  the upload pipeline failed, or configuration/tools are missing
    2  invalid command-line arguments
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError as SettingsValidationError

from shared_utils.config_loader import Settings
from shared_utils.constants import Defaults, LogScope
from shared_utils.di_container import DIContainer
from shared_utils.error_handler import (
    ConfigurationMissingError,
    InvalidConfigurationError,
)
from shared_utils.logging_utils import configure_logging, get_scoped_logger
from shared_utils.validation import InputValidator

logger = get_scoped_logger(LogScope.CLI)

EXIT_USAGE = 2

_EXAMPLES = """\
Examples:
  %(prog)s                                   Take and upload a screenshot
  %(prog)s -u image.png                      Upload local file
  %(prog)s -u https://example.com/image.png  Upload from URL
  %(prog)s -c                                Upload from clipboard content
  %(prog)s -v 0.5                            Take screenshot with 50%% volume
  %(prog)s -l 12                             Generate 12-character filenames
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdn-upload",
        description="Capture screenshots or upload files to an S3-compatible CDN.",
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-u", "--upload", metavar="SOURCE",
                        help="Upload file from local path or URL")
    parser.add_argument("-c", "--clipboard", action="store_true",
                        help="Upload from clipboard content (image, file path, URL or text)")
    parser.add_argument("-v", "--volume", metavar="VOL",
                        help=f"Set sound volume, 0-1 (default: {Defaults.SOUND_VOLUME})")
    parser.add_argument("-l", "--length", metavar="LEN",
                        help=f"Set random filename length (default: {Defaults.FILENAME_LENGTH})")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and validate arguments.

    Raises:
        InvalidConfigurationError: On conflicting modes or malformed values.
    """
    args = build_parser().parse_args(argv)

    if args.upload and args.clipboard:
        raise InvalidConfigurationError("Cannot use both --upload and --clipboard options")
    if args.volume is not None:
        args.volume = InputValidator.validate_volume(args.volume)
    if args.length is not None:
        args.length = InputValidator.validate_filename_length(args.length)
    return args


def load_settings(args: argparse.Namespace) -> Settings:
    """Build Settings from the environment with CLI overrides applied.

    Raises:
        ConfigurationMissingError: If required values are missing or invalid.
    """
    overrides: Dict[str, object] = {}
    if args.volume is not None:
        overrides["sound_volume"] = args.volume
    if args.length is not None:
        overrides["filename_length"] = args.length

    try:
        settings = Settings(**overrides)
    except SettingsValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ConfigurationMissingError(
            f"Missing or invalid configuration: {', '.join(fields)}",
            context={"fields": fields},
        ) from exc

    # secrets omitted
    logger.info(
        "configuration_loaded",
        endpoint=settings.minio_endpoint,
        bucket=settings.bucket_name,
        url_base=settings.url_base,
    )
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """CLI main — parse args, load config, wire deps, run one pipeline."""
    parser = build_parser()
    try:
        args = parse_args(argv)
    except InvalidConfigurationError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        settings = load_settings(args)
        configure_logging(settings.log_level)
        container = DIContainer(settings)
        container.verify_required_tools()
    except ConfigurationMissingError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    pipeline = container.get_pipeline_service()
    if args.clipboard:
        exit_code = pipeline.run_clipboard()
    elif args.upload:
        exit_code = pipeline.run_upload(args.upload)
    else:
        exit_code = pipeline.run_screenshot()

    result = pipeline.last_result
    if exit_code == 0 and result is not None:
        print(f"Public URL: {result.public_url}", file=sys.stderr)
        print(f"File Size: {result.formatted_size}", file=sys.stderr)
    return exit_code


def run() -> None:
    """Console-script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
