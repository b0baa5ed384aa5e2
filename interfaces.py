"""Protocol interfaces used by OcrController and StatusIndicator."""

from __future__ import annotations

from typing import Any, Protocol

from models import ClipboardImage


class Clipboard(Protocol):
    def read_image(self) -> ClipboardImage | None: ...

    def write_text(self, text: str) -> None: ...


class OcrClient(Protocol):
    def extract_text(self, image: ClipboardImage) -> str | None: ...


class TraySurface(Protocol):
    """Subset of QSystemTrayIcon the status indicator relies on."""

    def setIcon(self, icon: Any) -> None: ...

    def setToolTip(self, tip: str) -> None: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...
