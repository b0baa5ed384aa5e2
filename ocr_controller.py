"""State-machine based orchestration of one clipboard OCR run per shortcut press."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from errors import (
    CLIPBOARD_ERROR,
    EMPTY_OCR_RESULT,
    ERROR_MESSAGES,
    NO_CLIPBOARD_IMAGE,
    OCR_REQUEST_FAILED,
    OcrRequestFailed,
)
from interfaces import Clipboard, OcrClient
from models import OcrState

logger = logging.getLogger(__name__)

StateCallback = Callable[[OcrState, OcrState], None]
ErrorCallback = Callable[[str, str], None]


class OcrController:
    """Runs shortcut -> clipboard image -> OCR -> clipboard text.

    A press while a run is PROCESSING is dropped. A press while a previous
    run is holding its terminal state ends that hold and starts a new run.
    """

    def __init__(
        self,
        clipboard: Clipboard,
        ocr_client: OcrClient,
        dwell_s: float = 5.0,
        on_state_change: Optional[StateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._clipboard = clipboard
        self._ocr_client = ocr_client
        self._dwell_s = dwell_s
        self._on_state_change = on_state_change
        self._on_error = on_error

        self._lock = threading.RLock()
        self._state = OcrState.IDLE
        self._run_id = 0
        self._dwell_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> OcrState:
        return self._state

    def trigger(self) -> bool:
        with self._lock:
            if self._state == OcrState.PROCESSING:
                logger.info("OCR already in progress, ignoring shortcut")
                return False
            self._end_dwell()
            self._run_id += 1
            run_id = self._run_id
            dwell_event = threading.Event()
            self._dwell_event = dwell_event
            self._transition(OcrState.PROCESSING)

            thread = threading.Thread(
                target=self._run,
                args=(run_id, dwell_event),
                name=f"ocr-run-{run_id}",
                daemon=True,
            )
            self._thread = thread
        thread.start()
        return True

    def cancel(self) -> None:
        """Drop any terminal state being held and return to IDLE."""
        with self._lock:
            if self._state == OcrState.PROCESSING:
                return
            self._end_dwell()

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None:
            thread.join(timeout=timeout)

    def _run(self, run_id: int, dwell_event: threading.Event) -> None:
        try:
            terminal = self._process()
        except Exception:
            logger.exception("OCR run failed unexpectedly")
            self._emit_error(OCR_REQUEST_FAILED, ERROR_MESSAGES[OCR_REQUEST_FAILED])
            terminal = OcrState.FAILURE

        with self._lock:
            if run_id != self._run_id:
                return
            self._transition(terminal)

        # Set by the next press or cancel(), otherwise times out after dwell_s.
        if dwell_event.wait(timeout=self._dwell_s):
            return

        with self._lock:
            if run_id != self._run_id or self._state != terminal:
                return
            self._transition(OcrState.IDLE)

    def _process(self) -> OcrState:
        try:
            image = self._clipboard.read_image()
        except Exception as exc:
            logger.error("Reading clipboard failed: %s", exc)
            self._emit_error(CLIPBOARD_ERROR, ERROR_MESSAGES[CLIPBOARD_ERROR])
            return OcrState.FAILURE

        if image is None:
            logger.warning("No image found in clipboard")
            self._emit_error(NO_CLIPBOARD_IMAGE, ERROR_MESSAGES[NO_CLIPBOARD_IMAGE])
            return OcrState.FAILURE

        try:
            text = self._ocr_client.extract_text(image)
        except OcrRequestFailed as exc:
            logger.error("Error during OCR process (%s): %s", exc.code, exc, exc_info=exc.cause)
            self._emit_error(exc.code, ERROR_MESSAGES.get(exc.code, str(exc)))
            return OcrState.FAILURE
        except Exception:
            logger.exception("Unexpected error during OCR process")
            self._emit_error(OCR_REQUEST_FAILED, ERROR_MESSAGES[OCR_REQUEST_FAILED])
            return OcrState.FAILURE

        if not text or not text.strip():
            logger.warning("OCR returned no text")
            self._emit_error(EMPTY_OCR_RESULT, ERROR_MESSAGES[EMPTY_OCR_RESULT])
            return OcrState.FAILURE

        try:
            self._clipboard.write_text(text)
        except Exception as exc:
            logger.error("Writing clipboard failed: %s", exc)
            self._emit_error(CLIPBOARD_ERROR, ERROR_MESSAGES[CLIPBOARD_ERROR])
            return OcrState.FAILURE

        logger.info("Copied %d characters of OCR text to clipboard", len(text))
        return OcrState.SUCCESS

    def _end_dwell(self) -> None:
        self._dwell_event.set()
        if self._state.is_terminal:
            self._transition(OcrState.IDLE)

    def _emit_error(self, code: str, message: str) -> None:
        if self._on_error:
            self._on_error(code, message)

    def _transition(self, to_state: OcrState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        if self._on_state_change:
            self._on_state_change(from_state, to_state)
