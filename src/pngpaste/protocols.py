"""Capability contracts for the three pipeline stages.

The pipeline depends only on these protocols; production services and the
in-memory doubles used by the tests both satisfy them structurally.
"""

from typing import Protocol, runtime_checkable

from pngpaste.models import ClipboardImage, ImageSourceType, OutputFormat, OutputMode


@runtime_checkable
class ClipboardReading(Protocol):
    def read_image(self) -> ClipboardImage:
        """Return the clipboard image.

        Raises:
            PngPasteError: ``NO_IMAGE_ON_CLIPBOARD`` if no readable image is found.
        """
        ...

    def image_type(self, image: ClipboardImage) -> ImageSourceType:
        """Classify how ``image`` must be rendered.

        Raises:
            PngPasteError: ``UNSUPPORTED_IMAGE_FORMAT`` if the image is invalid or
                has neither a bitmap nor a PDF representation.
        """
        ...


@runtime_checkable
class ImageRendering(Protocol):
    def render(self, image: ClipboardImage, image_type: ImageSourceType, fmt: OutputFormat) -> bytes:
        """Encode ``image`` as ``fmt``. PDF content is rasterized at twice its size.

        Raises:
            PngPasteError: ``CONVERSION_FAILED`` carrying the format's display name.
        """
        ...


@runtime_checkable
class OutputWriting(Protocol):
    def write(self, data: bytes, mode: OutputMode) -> None:
        """Deliver ``data`` to the destination named by ``mode``.

        Raises:
            PngPasteError: ``WRITE_FAILURE`` for files, ``STDOUT_WRITE_FAILURE``
                for stdout and base64 output.
        """
        ...


__all__ = ["ClipboardReading", "ImageRendering", "OutputWriting"]
