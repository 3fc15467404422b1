import logging
from collections.abc import Sequence

from pngpaste.config import PREFERRED_PASTEBOARD_TYPES
from pngpaste.errors import PngPasteError
from pngpaste.models import ClipboardImage, ImageSourceType
from pngpaste.utils import decode_image_data

logger = logging.getLogger(__name__)


def general_pasteboard():
    from AppKit import NSPasteboard

    return NSPasteboard.generalPasteboard()


def platform_image_types() -> list[str]:
    """Every pasteboard type AppKit can turn into an image."""
    from AppKit import NSImage

    return [str(t) for t in NSImage.imageTypes()]


class ClipboardService:
    """Reads a single image from the pasteboard.

    The pasteboard is only read, never cleared or written. ``pasteboard`` and
    ``image_types`` default to AppKit's general pasteboard and image type list.
    """

    def __init__(self, pasteboard=None, image_types: Sequence[str] | None = None):
        self._pasteboard = pasteboard if pasteboard is not None else general_pasteboard()
        self._image_types = image_types

    def read_image(self) -> ClipboardImage:
        tried: list[str] = []

        available = self._pasteboard.availableTypeFromArray_(list(PREFERRED_PASTEBOARD_TYPES))
        if available is not None:
            tried.append(str(available))
            image = self._read_type(available)
            if image is not None:
                return image

        image = self._read_any_image(exclude=tried)
        if image is not None:
            return image

        raise PngPasteError.no_image_on_clipboard()

    def image_type(self, image: ClipboardImage) -> ImageSourceType:
        if not image.is_valid:
            raise PngPasteError.unsupported_image_format()

        if image.pdf_representations():
            return ImageSourceType.PDF

        if image.bitmap_representations():
            return ImageSourceType.BITMAP

        if image.tiff_representation() is not None:
            return ImageSourceType.BITMAP

        raise PngPasteError.unsupported_image_format()

    def _read_type(self, pasteboard_type) -> ClipboardImage | None:
        data = self._pasteboard.dataForType_(pasteboard_type)
        if data is None:
            logger.debug("Pasteboard advertised %s but returned no data", pasteboard_type)
            return None

        image = decode_image_data(bytes(data))
        if image is None or not image.is_valid:
            logger.debug("Discarding undecodable %s data", pasteboard_type)
            return None

        logger.debug("Read %s image (%gx%g)", pasteboard_type, image.width, image.height)
        return image

    def _read_any_image(self, exclude: Sequence[str]) -> ClipboardImage | None:
        image_types = list(self._image_types) if self._image_types is not None else platform_image_types()
        candidates = [t for t in image_types if t not in exclude]
        if not candidates:
            return None

        if not self._pasteboard.canReadItemWithDataConformingToTypes_(candidates):
            return None

        remaining = candidates
        while remaining:
            available = self._pasteboard.availableTypeFromArray_(remaining)
            if available is None:
                return None

            logger.debug("Falling back to generic image type %s", available)
            image = self._read_type(available)
            if image is not None:
                return image
            remaining = remaining[remaining.index(str(available)) + 1 :]

        return None
