import argparse
import logging
import os
import sys

from pngpaste import __version__
from pngpaste.config import EXIT_FAILURE, EXIT_SUCCESS, EXIT_USAGE, LOG_FORMAT, LOG_LEVEL, PROGRAM_NAME
from pngpaste.errors import ErrorKind, PngPasteError
from pngpaste.models import OutputFormat, OutputMode
from pngpaste.pipeline import PastePipeline, resolve_output_format, resolve_output_mode
from pngpaste.protocols import ClipboardReading, ImageRendering, OutputWriting

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Paste PNG into files, much like pbpaste does for text.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported input formats: PNG, PDF, GIF, TIF, JPEG, HEIC
Supported output formats: PNG, GIF, JPEG, TIFF
Output format is determined by the file extension, defaulting to PNG.

Examples:
  pngpaste screenshot.png    # Save clipboard image as PNG
  pngpaste photo.jpg         # Save as JPEG
  pngpaste - > image.png     # Binary PNG on stdout
  pngpaste -b | pbcopy       # Base64 PNG on stdout
""",
    )
    parser.add_argument(
        "output_path",
        nargs="?",
        help="Output file path (use '-' for binary stdout)",
    )
    parser.add_argument(
        "-b",
        dest="base64",
        action="store_true",
        help="Output to stdout as base64 encoded PNG",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline details to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _detach_stdout() -> None:
    """Point stdout at /dev/null so the interpreter's final flush can't fail again."""
    if sys.stdout is None:
        return
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        return


def paste(
    mode: OutputMode,
    fmt: OutputFormat,
    clipboard: ClipboardReading | None = None,
    renderer: ImageRendering | None = None,
    writer: OutputWriting | None = None,
) -> int:
    """Run one paste and turn the outcome into an exit code."""
    if clipboard is None:
        from pngpaste.clipboard import ClipboardService

        clipboard = ClipboardService()
    if renderer is None:
        from pngpaste.render import ImageRenderService

        renderer = ImageRenderService()
    if writer is None:
        from pngpaste.output import OutputService

        writer = OutputService()

    try:
        PastePipeline(clipboard, renderer, writer).run(mode, fmt)
    except PngPasteError as error:
        print(f"{PROGRAM_NAME}: {error.description}", file=sys.stderr)
        if error.kind is ErrorKind.STDOUT_WRITE_FAILURE:
            _detach_stdout()
        return EXIT_FAILURE

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    mode = resolve_output_mode(args.base64, args.output_path)
    if mode is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    configure_logging(args.verbose)
    fmt = resolve_output_format(mode)
    logger.debug("Output mode %s, format %s", mode.kind.value, fmt.display_name)
    return paste(mode, fmt)


if __name__ == "__main__":
    sys.exit(main())
