"""Shared error codes, user-facing messages and exceptions."""

from __future__ import annotations

MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
NO_CLIPBOARD_IMAGE = "NO_CLIPBOARD_IMAGE"
OCR_REQUEST_FAILED = "OCR_REQUEST_FAILED"
EMPTY_OCR_RESULT = "EMPTY_OCR_RESULT"
AUTH_FAILED = "AUTH_FAILED"
NETWORK_ERROR = "NETWORK_ERROR"
CLIPBOARD_ERROR = "CLIPBOARD_ERROR"

ERROR_MESSAGES = {
    MISSING_CREDENTIAL: "DASHSCOPE_API_KEY not found in environment or config file.",
    NO_CLIPBOARD_IMAGE: "No image found in clipboard.",
    OCR_REQUEST_FAILED: "OCR request failed, please retry.",
    EMPTY_OCR_RESULT: "No text was recognised in the image.",
    AUTH_FAILED: "API key is invalid.",
    NETWORK_ERROR: "Network failed, please retry.",
    CLIPBOARD_ERROR: "Clipboard is not accessible.",
}


class MissingCredentialError(RuntimeError):
    def __init__(self, message: str = ERROR_MESSAGES[MISSING_CREDENTIAL]) -> None:
        super().__init__(message)
        self.code = MISSING_CREDENTIAL


class OcrRequestFailed(RuntimeError):
    """The remote OCR call could not be completed.

    ``cause`` keeps the original SDK/transport exception (if any) so that it
    can be logged; ``code`` is one of OCR_REQUEST_FAILED, AUTH_FAILED or
    NETWORK_ERROR.
    """

    def __init__(
        self,
        message: str,
        code: str = OCR_REQUEST_FAILED,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.cause = cause


class ClipboardUnavailableError(RuntimeError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.code = CLIPBOARD_ERROR
