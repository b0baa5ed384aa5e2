"""Menu-bar status marker reflecting the OCR state."""

from __future__ import annotations

import logging
from typing import Any, Callable

from interfaces import TraySurface
from models import OcrState

try:
    from PySide6.QtCore import QSize
    from PySide6.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
except Exception:  # pragma: no cover
    QSize = None  # type: ignore
    QBrush = None  # type: ignore
    QColor = None  # type: ignore
    QIcon = None  # type: ignore
    QPainter = None  # type: ignore
    QPixmap = None  # type: ignore

logger = logging.getLogger(__name__)

STATE_COLORS = {
    OcrState.PROCESSING: "#FFC300",  # amber
    OcrState.SUCCESS: "#34C759",  # green
    OcrState.FAILURE: "#FF3B30",  # red
}

STATE_TOOLTIPS = {
    OcrState.PROCESSING: "Clip2Text — Recognising...",
    OcrState.SUCCESS: "Clip2Text — Text copied",
    OcrState.FAILURE: "Clip2Text — Failed",
}


def create_status_icon(color: str, size: int = 22) -> Any:
    """Generate a filled circle icon with the given color."""
    if QPixmap is None:
        raise RuntimeError("PySide6 is not installed")
    pixmap = QPixmap(QSize(size, size))
    pixmap.fill(QColor(0, 0, 0, 0))  # transparent background
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(QColor(color))
    painter.drawEllipse(2, 2, size - 4, size - 4)
    painter.end()
    return QIcon(pixmap)


class StatusIndicator:
    """Single tray slot that shows one colored marker or nothing.

    Every call must happen on the Qt UI thread.
    """

    def __init__(
        self,
        tray: TraySurface,
        icon_factory: Callable[[str], Any] = create_status_icon,
    ) -> None:
        self._tray = tray
        self._icon_factory = icon_factory
        self._icons: dict[OcrState, Any] = {}
        self._current = OcrState.IDLE

    @property
    def current(self) -> OcrState:
        return self._current

    def show(self, state: OcrState) -> None:
        if state == OcrState.IDLE:
            self.clear()
            return
        # The slot is reused, so the new icon replaces the old one in place.
        self._tray.setIcon(self._icon_for(state))
        self._tray.setToolTip(STATE_TOOLTIPS[state])
        if self._current == OcrState.IDLE:
            self._tray.show()
        self._current = state
        logger.debug("Status marker -> %s", state.value)

    def clear(self) -> None:
        if self._current == OcrState.IDLE:
            return
        self._tray.hide()
        self._current = OcrState.IDLE
        logger.debug("Status marker cleared")

    def set_detail(self, text: str) -> None:
        if self._current == OcrState.IDLE:
            return
        self._tray.setToolTip(f"{STATE_TOOLTIPS[self._current]}: {text}")

    def _icon_for(self, state: OcrState) -> Any:
        icon = self._icons.get(state)
        if icon is None:
            icon = self._icon_factory(STATE_COLORS[state])
            self._icons[state] = icon
        return icon
