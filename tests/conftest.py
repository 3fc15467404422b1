import io
from unittest.mock import MagicMock

import pytest
from PIL import Image

from pngpaste.models import BitmapRepresentation, ClipboardImage
from pngpaste.utils import decode_pdf


def encode(image: Image.Image, fmt: str) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_bitmap_image():
    """Factory for a solid-color bitmap ClipboardImage."""

    def _make(width: int = 100, height: int = 100, color="red", mode: str = "RGB") -> ClipboardImage:
        image = Image.new(mode, (width, height), color)
        return ClipboardImage(width=width, height=height, representations=[BitmapRepresentation(image=image)])

    return _make


@pytest.fixture
def make_pdf_bytes():
    """Factory for a one-page PDF whose page is width x height points."""

    def _make(width: int = 100, height: int = 100, color="blue") -> bytes:
        return encode(Image.new("RGB", (width, height), color), "PDF")

    return _make


@pytest.fixture
def make_pdf_image(make_pdf_bytes):
    def _make(width: int = 100, height: int = 100, color="blue") -> ClipboardImage:
        image = decode_pdf(make_pdf_bytes(width, height, color))
        assert image is not None
        return image

    return _make


@pytest.fixture
def make_image_bytes():
    def _make(fmt: str = "PNG", width: int = 100, height: int = 100, color="red") -> bytes:
        return encode(Image.new("RGB", (width, height), color), fmt)

    return _make


@pytest.fixture
def make_pasteboard():
    """Factory for a MagicMock pasteboard holding ``{type: bytes}`` contents.

    Type lookups honor the order of the array the caller passes, as
    NSPasteboard.availableTypeFromArray_ does.
    """

    def _make(contents: dict[str, bytes] | None = None) -> MagicMock:
        contents = contents or {}
        pasteboard = MagicMock()
        pasteboard.types.return_value = list(contents)
        pasteboard.availableTypeFromArray_.side_effect = lambda types: next(
            (t for t in types if t in contents), None
        )
        pasteboard.canReadItemWithDataConformingToTypes_.side_effect = lambda types: any(
            t in contents for t in types
        )
        pasteboard.dataForType_.side_effect = lambda t: contents.get(t)
        return pasteboard

    return _make
