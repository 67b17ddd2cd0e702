#!/usr/bin/env python3
"""
VIN Scan CLI - Command Line Interface
=====================================

Main CLI entry point for VIN scan operations.

Usage:
    vin-scan validate <code>...        Sanitize and validate candidate strings
    vin-scan scan <image>...           Scan a sequence of images as frames
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .config import get_config
from .core import is_valid_vin, sanitize_possible_vin
from .exceptions import FrameLoadError

logger = logging.getLogger(__name__)


def cmd_validate(args):
    """Sanitize and validate each candidate string."""
    config = get_config()
    min_length = config.validator.min_length

    results = []
    for code in args.codes:
        sanitized = sanitize_possible_vin(
            code, min_length=min_length, strip_char=config.validator.strip_char
        )
        valid = sanitized is not None and is_valid_vin(sanitized, min_length=min_length)
        results.append({'code': code, 'sanitized': sanitized, 'valid': valid})

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for result in results:
            status = "VALID" if result['valid'] else "INVALID"
            shown = result['sanitized'] if result['sanitized'] is not None else '-'
            print(f"{result['code']}: {status} (sanitized: {shown})")

    return 0 if all(r['valid'] for r in results) else 1


def cmd_scan(args):
    """Run images through a scan session, one frame per image."""
    from .preprocessing import FrameAlternator
    from .providers import OpenCVBarcodeDecoder
    from .scanning import VINScanDelegate, VINScanSession

    class _PrintingDelegate(VINScanDelegate):
        def __init__(self):
            self.vin = None
            self.error = None

        def vin_scan_permission_denied(self):
            print("Error: Camera permission denied")

        def vin_scan_succeeded(self, code):
            self.vin = code

        def vin_scan_failed(self, error):
            self.error = error
            print(f"Warning: {error}")

        def vin_scan_unavailable(self):
            print("Error: No barcode decoder available")

    config = get_config()
    alternator = FrameAlternator(
        enabled=config.frames.alternate_inversion and not args.no_invert
    )

    delegate = _PrintingDelegate()
    session = VINScanSession(
        delegate, decoder=OpenCVBarcodeDecoder(), config=config, alternator=alternator
    )

    with session:
        if not session.is_running:
            return 1

        for image_path in args.images:
            try:
                frame = _load_frame(image_path)
            except FrameLoadError as e:
                print(f"Error: {e.message}")
                return 1

            session.process_frame(frame)
            if not session.is_running:
                break

    if delegate.vin is None:
        print("No VIN found")
        return 1

    if args.json:
        print(json.dumps({'vin': delegate.vin, 'frames': session.frame_index}, indent=2))
    else:
        print(f"VIN: {delegate.vin}")
    return 0


def _load_frame(image_path):
    import cv2

    path = Path(image_path)
    if not path.exists():
        raise FrameLoadError(str(path), "file not found")

    frame = cv2.imread(str(path))
    if frame is None:
        raise FrameLoadError(str(path), "not a readable image")
    return frame


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='vin-scan',
        description='VIN Scan - Extract a Vehicle Identification Number from barcodes',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--log-level', default=None, type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (case-insensitive)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Validate candidate strings')
    validate_parser.add_argument('codes', nargs='+', help='Candidate VIN strings')
    validate_parser.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # Scan command
    scan_parser = subparsers.add_parser('scan', help='Scan images as a frame sequence')
    scan_parser.add_argument('images', nargs='+', help='Image files, in frame order')
    scan_parser.add_argument('--no-invert', action='store_true',
                             help='Do not invert every other frame')
    scan_parser.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    args = parser.parse_args(argv)

    if args.log_level:
        get_config().logging.level = args.log_level
        logging.getLogger().setLevel(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        'validate': cmd_validate,
        'scan': cmd_scan,
    }

    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
