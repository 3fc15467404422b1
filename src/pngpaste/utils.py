import io
import logging

import pypdfium2 as pdfium
from PIL import Image
from pillow_heif import register_heif_opener

from pngpaste.models import BitmapRepresentation, ClipboardImage, PDFRepresentation

logger = logging.getLogger(__name__)

register_heif_opener()

PDF_MAGIC = b"%PDF"


def is_pdf_data(data: bytes) -> bool:
    return data.startswith(PDF_MAGIC)


def decode_pdf(data: bytes) -> ClipboardImage | None:
    """Wrap PDF bytes, sized by the bounds of their first page."""
    try:
        pdf = pdfium.PdfDocument(data)
    except pdfium.PdfiumError:
        logger.debug("Could not open PDF data (%d bytes)", len(data))
        return None
    try:
        if len(pdf) == 0:
            return None
        page = pdf[0]
        width, height = page.get_size()
        page.close()
    finally:
        pdf.close()

    return ClipboardImage(
        width=width,
        height=height,
        representations=[PDFRepresentation(data=data, bounds=(width, height))],
    )


def decode_bitmap(data: bytes) -> ClipboardImage | None:
    """Decode raster data with Pillow. Multi-frame images keep their first frame."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError, Image.DecompressionBombError):
        logger.debug("Pillow could not decode %d bytes", len(data))
        return None

    width, height = image.size
    return ClipboardImage(
        width=width,
        height=height,
        representations=[BitmapRepresentation(image=image)],
    )


def decode_image_data(data: bytes | None) -> ClipboardImage | None:
    if not data:
        return None
    if is_pdf_data(data):
        return decode_pdf(data)
    return decode_bitmap(data)
