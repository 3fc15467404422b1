"""Sequencing of a single paste run: read, classify, render, write."""

import logging

from pngpaste.models import OutputFormat, OutputKind, OutputMode
from pngpaste.protocols import ClipboardReading, ImageRendering, OutputWriting

logger = logging.getLogger(__name__)

STDOUT_PATH = "-"


def resolve_output_mode(base64: bool, output_path: str | None) -> OutputMode | None:
    """Pick the destination; ``None`` means nothing was requested and usage applies.

    The base64 flag wins over any path argument.
    """
    if base64:
        return OutputMode.base64()
    if output_path is None:
        return None
    if output_path == STDOUT_PATH:
        return OutputMode.stdout()
    return OutputMode.file(output_path)


def resolve_output_format(mode: OutputMode) -> OutputFormat:
    if mode.kind is OutputKind.FILE:
        return OutputFormat.from_filename(mode.path)
    return OutputFormat.PNG


class PastePipeline:
    def __init__(self, clipboard: ClipboardReading, renderer: ImageRendering, writer: OutputWriting):
        self._clipboard = clipboard
        self._renderer = renderer
        self._writer = writer

    def run(self, mode: OutputMode, fmt: OutputFormat) -> None:
        """Run every stage in order. The first PngPasteError aborts the rest."""
        image = self._clipboard.read_image()
        image_type = self._clipboard.image_type(image)
        logger.debug("Clipboard image classified as %s", image_type.value)

        data = self._renderer.render(image, image_type, fmt)
        logger.debug("Rendered %d bytes of %s", len(data), fmt.display_name)

        self._writer.write(data, mode)
