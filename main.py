"""Application entrypoint."""

from __future__ import annotations

import logging
import os
import sys

from clipboard import SystemClipboard
from config import ShortcutStore, resolve_credential
from errors import MissingCredentialError
from hotkey import GlobalHotkeyAdapter
from models import OcrState
from ocr_client import DashscopeOcrClient
from ocr_controller import OcrController
from status_indicator import StatusIndicator, create_status_icon

try:
    from PySide6.QtCore import QObject, Signal
    from PySide6.QtGui import QAction
    from PySide6.QtWidgets import QApplication, QInputDialog, QMenu, QMessageBox, QSystemTrayIcon
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

try:
    import AppKit
except Exception:  # pragma: no cover
    AppKit = None  # type: ignore

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "CLIP2TEXT_LOG_LEVEL"
EXIT_OK = 0
EXIT_MISSING_CREDENTIAL = 1

ICON_APP = "#888888"  # grey


def configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def hide_dock_icon() -> bool:
    """Run as a menu-bar accessory with no Dock icon. Returns False off macOS."""
    if AppKit is None:
        return False
    AppKit.NSApplication.sharedApplication().setActivationPolicy_(
        AppKit.NSApplicationActivationPolicyAccessory
    )
    return True


class UIBridge(QObject):
    state_signal = Signal(str, str)  # from_state, to_state
    error_signal = Signal(str, str)  # code, message


class App:
    def __init__(self, api_key: str) -> None:
        self.app = QApplication(sys.argv)
        self.app.setQuitOnLastWindowClosed(False)
        hide_dock_icon()
        self.shortcut_store = ShortcutStore()
        self._last_error = ""
        self.ui = UIBridge()
        self.ui.state_signal.connect(self._on_state_change_ui)
        self.ui.error_signal.connect(self._on_error_ui)

        self.controller = OcrController(
            clipboard=SystemClipboard(),
            ocr_client=DashscopeOcrClient(api_key=api_key),
            on_state_change=self._on_state_change,
            on_error=self._on_error,
        )
        self.hotkey = GlobalHotkeyAdapter(binding=self.shortcut_store.ensure_default_hotkey())

        self.status = StatusIndicator(QSystemTrayIcon())

        self.tray = QSystemTrayIcon()
        self.tray.setIcon(create_status_icon(ICON_APP, size=18))
        self.tray.setToolTip(f"Clip2Text — {self.hotkey.binding}")
        self._setup_menu()
        self.tray.show()

    def _setup_menu(self) -> None:
        menu = QMenu()

        hotkey_action = QAction("Set Shortcut", menu)
        hotkey_action.triggered.connect(self._set_hotkey)
        menu.addAction(hotkey_action)

        menu.addSeparator()
        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self.quit)
        menu.addAction(quit_action)

        self.tray.setContextMenu(menu)
        self._menu = menu

    def _set_hotkey(self) -> None:
        value, ok = QInputDialog.getText(
            None,
            "Shortcut",
            "Use pynput hotkey format, e.g. <ctrl>+<cmd>+<shift>+5",
            text=self.hotkey.binding,
        )
        if not ok or not value:
            return
        try:
            self.hotkey.rebind(value)
        except ValueError as exc:
            QMessageBox.warning(None, "Invalid shortcut", str(exc))
            return
        self.shortcut_store.set_hotkey(value)
        self.tray.setToolTip(f"Clip2Text — {value}")
        QMessageBox.information(None, "Saved", "Shortcut saved and applied.")

    # ------------------------------------------------------------------
    # Callbacks (called from worker threads → emit signals for UI thread)
    # ------------------------------------------------------------------

    def _on_state_change(self, from_state: OcrState, to_state: OcrState) -> None:
        self.ui.state_signal.emit(from_state.value, to_state.value)

    def _on_error(self, code: str, message: str) -> None:
        self.ui.error_signal.emit(code, message)

    # ------------------------------------------------------------------
    # UI thread handlers (safe for Qt)
    # ------------------------------------------------------------------

    def _on_state_change_ui(self, from_state: str, to_state: str) -> None:
        state = OcrState(to_state)
        if state == OcrState.PROCESSING:
            self._last_error = ""
        self.status.show(state)
        if state == OcrState.FAILURE and self._last_error:
            self.status.set_detail(self._last_error)

    def _on_error_ui(self, code: str, message: str) -> None:
        # Arrives before the FAILURE transition it explains.
        self._last_error = message

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> int:
        try:
            self.hotkey.start(on_trigger=self.controller.trigger)
        except Exception as exc:
            logger.error("Global shortcut disabled: %s", exc)
            self.tray.showMessage("Clip2Text", f"Shortcut disabled: {exc}")
        return self.app.exec()

    def quit(self) -> None:
        self.hotkey.stop()
        self.controller.cancel()
        self.app.quit()


def main() -> int:
    configure_logging()
    try:
        api_key = resolve_credential()
    except MissingCredentialError as exc:
        logger.error("%s", exc)
        return EXIT_MISSING_CREDENTIAL

    app = App(api_key=api_key)
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
