"""In-memory stand-ins for the pipeline services."""

from pngpaste.errors import PngPasteError
from pngpaste.models import ClipboardImage, ImageSourceType, OutputFormat, OutputMode


class MockClipboardService:
    def __init__(
        self,
        image: ClipboardImage | None = None,
        image_type: ImageSourceType = ImageSourceType.BITMAP,
        error: PngPasteError | None = None,
    ):
        self.image = image
        self.image_type_to_return = image_type
        self.error = error
        self.calls: list[str] = []

    def read_image(self) -> ClipboardImage:
        self.calls.append("read_image")
        if self.error is not None:
            raise self.error
        if self.image is None:
            raise PngPasteError.no_image_on_clipboard()
        return self.image

    def image_type(self, image: ClipboardImage) -> ImageSourceType:
        self.calls.append("image_type")
        if self.error is not None:
            raise self.error
        return self.image_type_to_return


class MockImageRenderService:
    def __init__(self, data: bytes = b"rendered", error: PngPasteError | None = None):
        self.data = data
        self.error = error
        self.calls: list[tuple[ClipboardImage, ImageSourceType, OutputFormat]] = []

    def render(self, image: ClipboardImage, image_type: ImageSourceType, fmt: OutputFormat) -> bytes:
        self.calls.append((image, image_type, fmt))
        if self.error is not None:
            raise self.error
        return self.data


class MockOutputService:
    def __init__(self, error: PngPasteError | None = None):
        self.error = error
        self.written_data: bytes | None = None
        self.written_mode: OutputMode | None = None

    def write(self, data: bytes, mode: OutputMode) -> None:
        if self.error is not None:
            raise self.error
        self.written_data = data
        self.written_mode = mode
