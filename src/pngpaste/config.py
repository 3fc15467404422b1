import logging
import os

PROGRAM_NAME = "pngpaste"

PDF_SCALE_FACTOR = 2.0  # vector content is rasterized at twice its native size
JPEG_COMPRESSION_QUALITY = 0.9

# Probed in order; the first type the pasteboard advertises wins.
PREFERRED_PASTEBOARD_TYPES = (
    "public.png",
    "public.tiff",
    "public.heic",
    "public.jpeg",
    "com.compuserve.gif",
    "com.adobe.pdf",
)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _parse_log_level() -> int:
    raw = os.environ.get("PNGPASTE_LOG_LEVEL")
    if raw is None:
        return logging.WARNING
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        return logging.WARNING
    return level


LOG_LEVEL = _parse_log_level()
