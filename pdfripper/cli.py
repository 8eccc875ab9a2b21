"""
CLI pdfripper.

Запуск:
    pdfripper -input document.pdf
    pdfripper -input document.pdf -output pages/ -processes 4

Или:
    python -m pdfripper -input document.pdf
"""

import argparse
import logging
from typing import Optional, Sequence

from pdfripper import __version__
from pdfripper.config import settings
from pdfripper.exceptions import ConfigError, PdfRipperError
from pdfripper.services.extractor import new_extractor

logger = logging.getLogger("pdfripper")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfripper",
        description="Extract the text of every PDF page into page_<N>.txt files, in parallel.",
    )
    parser.add_argument(
        "-input", "--input",
        dest="input",
        default="",
        help="Input PDF file path (required)",
    )
    parser.add_argument(
        "-output", "--output",
        dest="output",
        default="",
        help="Output directory (default: PDF basename)",
    )
    parser.add_argument(
        "-processes", "--processes",
        dest="processes",
        type=int,
        default=settings.process_count,
        help="Number of concurrent workers (default: number of CPU cores)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Точка входа CLI.

    Returns:
        int: код выхода (0 — успех, 1 — ошибка извлечения, 2 — ошибка аргументов)
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [PdfRipper] %(message)s",
        datefmt="%H:%M:%S",
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input:
        parser.print_usage()
        logger.error("Error: input PDF file is required (use -input)")
        return 2

    try:
        extractor = new_extractor(args.input, args.output, args.processes)
    except ConfigError as e:
        logger.error(f"Error initializing extractor: {e}")
        return 1

    try:
        extractor.extract_pages()
    except PdfRipperError as e:
        logger.error(f"Error extracting pages: {e}")
        return 1

    print("Extraction complete.")
    return 0
