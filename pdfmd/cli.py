"""Command-line interface for PDF to Markdown conversion."""

import argparse
import logging
import sys
from pathlib import Path

from pdfmd import __version__
from pdfmd.converter import ConversionOptions, PDFConverter


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Command-line arguments. Uses sys.argv if None.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="pdfmd",
        description="Convert PDF text to Markdown, rebuilding paragraphs, bold emphasis and lists.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdfmd document.pdf                    Convert to stdout
  pdfmd document.pdf -o output.md       Convert to file
  pdfmd *.pdf -o ./output/              Batch convert multiple files
        """,
    )

    parser.add_argument(
        "input",
        nargs="+",
        type=Path,
        help="Input PDF file(s) to convert",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file or directory. If directory, creates .md files named after the inputs.",
    )

    parser.add_argument(
        "--no-title",
        action="store_true",
        help="Do not start the document with a heading named after the file",
    )

    parser.add_argument(
        "--no-bold",
        action="store_true",
        help="Do not mark text in non-regular fonts as bold",
    )

    parser.add_argument(
        "--no-lists",
        action="store_true",
        help="Do not detect bullet and numbered lists",
    )

    parser.add_argument(
        "--keep-citations",
        action="store_true",
        help="Keep small numeric footnote markers in the output",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and font analysis to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)


def create_options(args: argparse.Namespace) -> ConversionOptions:
    """Create ConversionOptions from parsed arguments.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Configured ConversionOptions object.
    """
    return ConversionOptions(
        include_title=not args.no_title,
        detect_bold=not args.no_bold,
        detect_lists=not args.no_lists,
        strip_citations=not args.keep_citations,
    )


def process_single_file(input_path: Path, output: Path | None, converter: PDFConverter, verbose: bool) -> bool:
    """Process a single PDF file.

    Args:
        input_path: Path to the input PDF.
        output: File to write, directory to write into, or None for stdout.
        converter: Configured PDFConverter instance.
        verbose: Whether to print progress messages.

    Returns:
        True if conversion succeeded, False otherwise.
    """
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return False

    if not input_path.suffix.lower() == ".pdf":
        print(f"Warning: {input_path} may not be a PDF file", file=sys.stderr)

    if verbose:
        print(f"Converting: {input_path}", file=sys.stderr)

    try:
        result = converter.convert_file(input_path)
    except Exception as e:
        print(f"Error converting {input_path}: {e}", file=sys.stderr)
        return False

    if output is None:
        print(result.markdown)
        return True

    output_path = output / result.output_name if output.is_dir() else output
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.markdown, encoding="utf-8")
    if verbose:
        print(f"  -> {output_path} ({result.page_count} pages)", file=sys.stderr)

    return True


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command-line arguments. Uses sys.argv if None.

    Returns:
        Exit code (0 for success, 1 for errors).
    """
    parsed_args = parse_args(args)

    if parsed_args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    converter = PDFConverter(create_options(parsed_args))

    input_files = parsed_args.input
    output = parsed_args.output
    verbose = parsed_args.verbose

    # Several inputs always go into a directory.
    if output and len(input_files) > 1:
        output.mkdir(parents=True, exist_ok=True)

    error_count = 0
    for input_path in input_files:
        if not process_single_file(input_path, output, converter, verbose):
            error_count += 1

    if verbose and len(input_files) > 1:
        success_count = len(input_files) - error_count
        print(f"\nProcessed {success_count} files, {error_count} errors", file=sys.stderr)

    return 0 if error_count == 0 else 1
