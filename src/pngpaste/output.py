import base64
import logging
import os
import sys
import tempfile
from typing import BinaryIO

from pngpaste.errors import PngPasteError
from pngpaste.models import OutputKind, OutputMode

logger = logging.getLogger(__name__)


def _default_file_mode() -> int:
    # umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomically(data: bytes, path: str) -> None:
    """Replace ``path`` with ``data`` via a temp file in the same directory.

    Readers of ``path`` see either the previous file or the complete new one.
    Raises OSError on failure, after removing the temp file.
    """
    directory = os.path.dirname(path)
    try:
        mode = os.stat(path).st_mode & 0o7777
    except FileNotFoundError:
        mode = _default_file_mode()

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".pngpaste-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise


class OutputService:
    """Delivers rendered bytes to a file, stdout, or stdout as base64."""

    def __init__(self, stdout: BinaryIO | None = None):
        self._stdout = stdout

    def write(self, data: bytes, mode: OutputMode) -> None:
        match mode.kind:
            case OutputKind.FILE:
                self._write_to_file(data, mode.path)
            case OutputKind.STDOUT:
                self._write_to_stdout(data)
            case OutputKind.BASE64:
                self._write_base64_to_stdout(data)

    def _write_to_file(self, data: bytes, path: str) -> None:
        target = os.path.normpath(os.path.abspath(path))
        try:
            write_atomically(data, target)
        except OSError as exc:
            raise PngPasteError.write_failure(path, exc.strerror or str(exc)) from exc
        logger.info("Wrote %d bytes to %s", len(data), target)

    def _write_to_stdout(self, data: bytes) -> None:
        try:
            stream = self._stdout if self._stdout is not None else self._system_stdout()
            stream.write(data)
            stream.flush()
        except (OSError, ValueError) as exc:
            reason = getattr(exc, "strerror", None) or str(exc)
            raise PngPasteError.stdout_write_failure(reason) from exc

    @staticmethod
    def _system_stdout() -> BinaryIO:
        # sys.stdout is None when the process was started with fd 1 closed.
        if sys.stdout is None:
            raise ValueError("standard output is closed")
        return sys.stdout.buffer

    def _write_base64_to_stdout(self, data: bytes) -> None:
        self._write_to_stdout(base64.b64encode(data))
