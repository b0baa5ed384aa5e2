"""Global hotkey adapter based on pynput."""

from __future__ import annotations

import logging
from typing import Callable, Optional

try:
    from pynput import keyboard
except Exception:  # pragma: no cover
    keyboard = None  # type: ignore

logger = logging.getLogger(__name__)


class GlobalHotkeyAdapter:
    def __init__(self, binding: str) -> None:
        self._binding = binding
        self._listener: Optional[object] = None
        self._on_trigger: Optional[Callable[[], None]] = None

    @property
    def binding(self) -> str:
        return self._binding

    def start(self, on_trigger: Callable[[], None]) -> None:
        if keyboard is None:
            raise RuntimeError("pynput is not installed")
        if self._listener is not None:
            return

        self._listener = self._listen(self._binding, on_trigger)
        self._on_trigger = on_trigger

    def stop(self) -> None:
        listener = self._listener
        if listener is not None:
            listener.stop()
            self._listener = None

    def rebind(self, binding: str) -> None:
        """Switch to a new binding.

        The new listener is started before the old one is stopped, so an
        unparsable binding raises ValueError and leaves the current one active.
        """
        old_listener = self._listener
        on_trigger = self._on_trigger
        if old_listener is None or on_trigger is None:
            self._binding = binding
            return

        new_listener = self._listen(binding, on_trigger)
        old_listener.stop()
        self._listener = new_listener
        self._binding = binding

    def _listen(self, binding: str, on_trigger: Callable[[], None]) -> object:
        def _on_activate() -> None:
            logger.debug("Hotkey %s activated", binding)
            on_trigger()

        listener = keyboard.GlobalHotKeys({binding: _on_activate})
        listener.start()
        logger.info("Registered global shortcut %s", binding)
        return listener
