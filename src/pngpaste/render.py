import io
import logging

import pypdfium2 as pdfium
from PIL import Image

from pngpaste.config import PDF_SCALE_FACTOR
from pngpaste.errors import PngPasteError
from pngpaste.models import ClipboardImage, ImageSourceType, OutputFormat, PDFRepresentation

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)
TRANSPARENT = (255, 255, 255, 0)


def flatten_onto_white(image: Image.Image) -> Image.Image:
    """Composite ``image`` onto an opaque white background, dropping alpha."""
    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, WHITE)
    background.alpha_composite(rgba)
    return background.convert("RGB")


def encode_image(image: Image.Image, fmt: OutputFormat) -> bytes | None:
    if fmt is OutputFormat.JPEG and image.mode not in ("RGB", "L"):
        image = flatten_onto_white(image)

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt.pillow_format, **fmt.encoding_properties)
    except (OSError, ValueError) as exc:
        logger.debug("Pillow failed to encode %s image as %s: %s", image.mode, fmt.display_name, exc)
        return None
    return buffer.getvalue() or None


def rasterize_pdf(rep: PDFRepresentation, size: tuple[int, int]) -> Image.Image:
    """Rasterize the first page of ``rep`` onto a white RGBA canvas of ``size``."""
    canvas = Image.new("RGBA", size, WHITE)

    pdf = pdfium.PdfDocument(rep.data)
    try:
        page = pdf[0]
        bitmap = page.render(scale=PDF_SCALE_FACTOR, fill_color=TRANSPARENT)
        # to_pil() shares the bitmap's buffer, so copy before closing.
        raster = bitmap.to_pil().convert("RGBA")
        bitmap.close()
        page.close()
    finally:
        pdf.close()

    if raster.size != size:
        raster = raster.resize(size, Image.Resampling.LANCZOS)
    canvas.alpha_composite(raster)
    return canvas


class ImageRenderService:
    """Encodes clipboard images into the requested output format."""

    def render(self, image: ClipboardImage, image_type: ImageSourceType, fmt: OutputFormat) -> bytes:
        match image_type:
            case ImageSourceType.BITMAP:
                data = self._render_bitmap(image, fmt)
            case ImageSourceType.PDF:
                data = self._render_pdf(image, fmt)
            case _:
                data = None

        if not data:
            raise PngPasteError.conversion_failed(fmt.display_name)
        return data

    def _render_bitmap(self, image: ClipboardImage, fmt: OutputFormat) -> bytes | None:
        for rep in image.bitmap_representations():
            data = encode_image(rep.image, fmt)
            if data:
                return data

        logger.debug("Direct %s encoding failed, retrying through TIFF", fmt.display_name)
        tiff_data = image.tiff_representation()
        if tiff_data is None:
            return None

        try:
            with Image.open(io.BytesIO(tiff_data)) as decoded:
                canonical = decoded.convert("RGBA")
        except (OSError, ValueError):
            return None

        return encode_image(canonical, fmt)

    def _render_pdf(self, image: ClipboardImage, fmt: OutputFormat) -> bytes | None:
        reps = image.pdf_representations()
        if not reps:
            return None
        rep = reps[0]

        width = int(rep.bounds[0] * PDF_SCALE_FACTOR)
        height = int(rep.bounds[1] * PDF_SCALE_FACTOR)
        if width <= 0 or height <= 0:
            logger.debug("PDF bounds %r scale to an empty raster", rep.bounds)
            return None

        try:
            raster = rasterize_pdf(rep, (width, height))
        except (pdfium.PdfiumError, OSError, ValueError) as exc:
            logger.debug("Rasterizing PDF failed: %s", exc)
            return None

        logger.debug("Rasterized PDF at %dx%d", width, height)
        return encode_image(raster, fmt)
