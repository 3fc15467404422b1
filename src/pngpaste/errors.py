from enum import Enum


class ErrorKind(str, Enum):
    NO_IMAGE_ON_CLIPBOARD = "no_image_on_clipboard"
    UNSUPPORTED_IMAGE_FORMAT = "unsupported_image_format"
    CONVERSION_FAILED = "conversion_failed"
    WRITE_FAILURE = "write_failure"
    STDOUT_WRITE_FAILURE = "stdout_write_failure"


class PngPasteError(Exception):
    """Terminal failure of a paste run.

    The set of kinds is closed. Each kind carries only its own payload:
    ``format`` for conversion failures, ``path`` and ``reason`` for file write
    failures, ``reason`` for stdout failures. Build instances through the
    classmethods rather than the constructor.
    """

    def __init__(
        self,
        kind: ErrorKind,
        *,
        format: str | None = None,
        path: str | None = None,
        reason: str | None = None,
    ):
        self.kind = kind
        self.format = format
        self.path = path
        self.reason = reason
        super().__init__(self.description)

    @classmethod
    def no_image_on_clipboard(cls) -> "PngPasteError":
        return cls(ErrorKind.NO_IMAGE_ON_CLIPBOARD)

    @classmethod
    def unsupported_image_format(cls) -> "PngPasteError":
        return cls(ErrorKind.UNSUPPORTED_IMAGE_FORMAT)

    @classmethod
    def conversion_failed(cls, format: str) -> "PngPasteError":
        return cls(ErrorKind.CONVERSION_FAILED, format=format)

    @classmethod
    def write_failure(cls, path: str, reason: str) -> "PngPasteError":
        return cls(ErrorKind.WRITE_FAILURE, path=path, reason=reason)

    @classmethod
    def stdout_write_failure(cls, reason: str) -> "PngPasteError":
        return cls(ErrorKind.STDOUT_WRITE_FAILURE, reason=reason)

    @property
    def description(self) -> str:
        match self.kind:
            case ErrorKind.NO_IMAGE_ON_CLIPBOARD:
                return "no image data found on the clipboard"
            case ErrorKind.UNSUPPORTED_IMAGE_FORMAT:
                return "clipboard contains unsupported image format"
            case ErrorKind.CONVERSION_FAILED:
                return f"failed to convert image to {self.format}"
            case ErrorKind.WRITE_FAILURE:
                return f"failed to write to '{self.path}': {self.reason}"
            case ErrorKind.STDOUT_WRITE_FAILURE:
                return f"failed to write to stdout: {self.reason}"
        raise AssertionError(f"unhandled error kind: {self.kind!r}")

    def _payload(self) -> tuple:
        return (self.kind, self.format, self.path, self.reason)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PngPasteError):
            return NotImplemented
        return self._payload() == other._payload()

    def __hash__(self) -> int:
        return hash(self._payload())

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"PngPasteError({self.kind.name}, format={self.format!r}, path={self.path!r}, reason={self.reason!r})"
