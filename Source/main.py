"""
Tabsplit - Restaurant Bill Splitter

python3 main.py                          # Interactive CLI mode
python3 main.py --demo                   # Start from the demo dinner bill
python3 main.py receipt.jpg              # Scan a receipt and start CLI
python3 main.py receipt.jpg --quick      # Quick mode - just show the bill
python3 main.py --help                   # Show help
"""

import argparse
import logging
import sys

from cli_interface import SplitCLI
from config import DEFAULT_MAX_WORKERS, LOG_LEVEL, WORKERS_MAX, WORKERS_MIN
from fixtures import demo_bill
from ocr_processor import ParallelOCRProcessor
from utils import validate_image_path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Tabsplit - Restaurant Bill Splitter',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                     # Interactive mode
  python main.py --demo --quick      # Print the demo split and exit
  python main.py receipt.jpg         # Scan receipt then interactive
  python main.py --workers 8         # Use 8 parallel OCR workers
        """
    )

    parser.add_argument(
        'image',
        nargs='?',
        help='Receipt image to scan'
    )
    parser.add_argument(
        '--demo',
        action='store_true',
        help='Start from the demo dinner bill'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f'Number of parallel OCR workers (default: {DEFAULT_MAX_WORKERS})'
    )
    parser.add_argument(
        '--quick',
        action='store_true',
        help='Quick mode - show the bill and split results, then exit'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='Tabsplit 1.0'
    )
    return parser


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not WORKERS_MIN <= args.workers <= WORKERS_MAX:
        print(f"⚠ Workers must be between {WORKERS_MIN} and {WORKERS_MAX}")
        args.workers = max(WORKERS_MIN, min(WORKERS_MAX, args.workers))

    cli = SplitCLI(
        bill=demo_bill() if args.demo else None,
        processor=ParallelOCRProcessor(num_workers=args.workers),
    )

    if args.image:
        if not validate_image_path(args.image):
            print(f"❌ Invalid or unsupported image: {args.image}")
            return 1
        cli.process_receipt(args.image)
    elif args.quick:
        cli.display_bill()

    if args.quick:
        cli.display_results()
        return 0

    cli.run()
    return 0


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        sys.exit(0)
    except Exception:
        logger.exception("An error occurred")
        sys.exit(1)


if __name__ == "__main__":
    run()
