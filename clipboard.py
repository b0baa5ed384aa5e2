"""System clipboard adapter: image read via Pillow, text write via pyperclip."""

from __future__ import annotations

import io
import logging

from errors import ClipboardUnavailableError
from models import ClipboardImage

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

try:
    from PIL import Image, ImageGrab
except Exception:  # pragma: no cover
    Image = None  # type: ignore
    ImageGrab = None  # type: ignore

logger = logging.getLogger(__name__)


def _encode_png(image: object) -> ClipboardImage:
    buf = io.BytesIO()
    image.save(buf, format="PNG")  # type: ignore[attr-defined]
    width, height = image.size  # type: ignore[attr-defined]
    return ClipboardImage(png_bytes=buf.getvalue(), width=width, height=height)


class SystemClipboard:
    def read_image(self) -> ClipboardImage | None:
        if ImageGrab is None or Image is None:
            raise ClipboardUnavailableError("Pillow is not installed")

        content = ImageGrab.grabclipboard()
        if content is None:
            return None
        if isinstance(content, Image.Image):
            return _encode_png(content)
        # Copied files arrive as a list of paths; use the first image among them.
        if isinstance(content, list):
            for path in content:
                try:
                    with Image.open(path) as img:
                        img.load()
                        return _encode_png(img)
                except (OSError, ValueError):
                    logger.debug("Clipboard file %s is not an image", path)
        return None

    def write_text(self, text: str) -> None:
        if pyperclip is None:
            raise ClipboardUnavailableError("pyperclip is not installed")
        # pbcopy replaces every type on the pasteboard, so the image is dropped too.
        pyperclip.copy(text)
