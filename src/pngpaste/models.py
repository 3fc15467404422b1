import io
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath

from PIL import Image

from pngpaste.config import JPEG_COMPRESSION_QUALITY


class OutputFormat(str, Enum):
    PNG = "png"
    GIF = "gif"
    JPEG = "jpeg"
    TIFF = "tiff"

    @property
    def pillow_format(self) -> str:
        """Codec name understood by ``PIL.Image.save``."""
        return self.value.upper()

    @property
    def display_name(self) -> str:
        return self.value.upper()

    @property
    def encoding_properties(self) -> dict[str, int]:
        if self is OutputFormat.JPEG:
            return {"quality": round(JPEG_COMPRESSION_QUALITY * 100)}
        return {}

    @classmethod
    def from_extension(cls, ext: str) -> "OutputFormat":
        """Map a file extension (without the dot) to a format, defaulting to PNG."""
        match ext.lower():
            case "gif":
                return cls.GIF
            case "jpg" | "jpeg":
                return cls.JPEG
            case "tif" | "tiff":
                return cls.TIFF
            case _:
                return cls.PNG

    @classmethod
    def from_filename(cls, filename: str) -> "OutputFormat":
        return cls.from_extension(PurePath(filename).suffix.lstrip("."))


class OutputKind(str, Enum):
    FILE = "file"
    STDOUT = "stdout"
    BASE64 = "base64"


@dataclass(frozen=True)
class OutputMode:
    """Where the rendered bytes go. ``path`` is only set for file output."""

    kind: OutputKind
    path: str | None = None

    @classmethod
    def file(cls, path: str) -> "OutputMode":
        return cls(kind=OutputKind.FILE, path=path)

    @classmethod
    def stdout(cls) -> "OutputMode":
        return cls(kind=OutputKind.STDOUT)

    @classmethod
    def base64(cls) -> "OutputMode":
        return cls(kind=OutputKind.BASE64)


class ImageSourceType(Enum):
    BITMAP = "bitmap"
    PDF = "pdf"


@dataclass
class BitmapRepresentation:
    image: Image.Image


@dataclass
class PDFRepresentation:
    data: bytes
    bounds: tuple[float, float]  # page width and height in points


@dataclass
class ClipboardImage:
    width: float
    height: float
    representations: list[BitmapRepresentation | PDFRepresentation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0 and bool(self.representations)

    def bitmap_representations(self) -> list[BitmapRepresentation]:
        return [rep for rep in self.representations if isinstance(rep, BitmapRepresentation)]

    def pdf_representations(self) -> list[PDFRepresentation]:
        return [rep for rep in self.representations if isinstance(rep, PDFRepresentation)]

    def tiff_representation(self) -> bytes | None:
        """TIFF bytes of the first bitmap representation, or None without one."""
        bitmaps = self.bitmap_representations()
        if not bitmaps:
            return None
        buffer = io.BytesIO()
        try:
            bitmaps[0].image.save(buffer, format="TIFF")
        except (OSError, ValueError):
            return None
        return buffer.getvalue() or None
