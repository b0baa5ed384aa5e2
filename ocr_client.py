"""OCR client backed by a DashScope multimodal (Qwen-VL) model.

The clipboard image is sent inline as a base64 ``data:`` URI together with a
fixed system instruction that asks the model to return the recognised text
and nothing else.  The call is blocking; the controller runs it on a worker
thread.
"""

from __future__ import annotations

import base64
import logging
from http import HTTPStatus

from errors import AUTH_FAILED, NETWORK_ERROR, OCR_REQUEST_FAILED, OcrRequestFailed
from models import ClipboardImage

try:
    import dashscope
except Exception:  # pragma: no cover
    dashscope = None  # type: ignore

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are to OCR an image and your response should contain just the result "
    "of this. No commentary or annotation."
)

GENERATION_CONFIG = {
    "temperature": 1.0,
    "top_p": 0.95,
    "top_k": 40,
    "max_tokens": 8192,
    "response_format": {"type": "text"},
}


def _png_to_data_uri(png_bytes: bytes) -> str:
    """Encode PNG bytes as a data URI accepted by MultiModalConversation."""
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


class DashscopeOcrClient:
    def __init__(self, api_key: str, model: str = "qwen-vl-max") -> None:
        self._api_key = api_key
        self._model = model

    def extract_text(self, image: ClipboardImage) -> str | None:
        if dashscope is None:
            raise OcrRequestFailed("dashscope is not installed")

        logger.info(
            "Sending %dx%d image (%d bytes) to %s",
            image.width,
            image.height,
            len(image.png_bytes),
            self._model,
        )
        try:
            response = dashscope.MultiModalConversation.call(
                api_key=self._api_key,
                model=self._model,
                messages=[
                    {"role": "system", "content": [{"text": SYSTEM_INSTRUCTION}]},
                    {
                        "role": "user",
                        "content": [
                            {"image": _png_to_data_uri(image.png_bytes)},
                            {"text": ""},
                        ],
                    },
                ],
                result_format="message",
                **GENERATION_CONFIG,
            )
        except Exception as exc:
            raise self._to_request_failed(exc) from exc

        status_code = getattr(response, "status_code", HTTPStatus.OK)
        if status_code != HTTPStatus.OK:
            code = getattr(response, "code", "") or ""
            message = getattr(response, "message", "") or ""
            raise self._to_request_failed(
                RuntimeError(f"HTTP {status_code} {code}: {message}".strip())
            )

        return self._extract_text(response)

    def _extract_text(self, response: object) -> str | None:
        """Pull the first text part out of a ``result_format='message'`` reply."""
        if not isinstance(response, dict):
            return None
        output = response.get("output") or {}
        choices = output.get("choices") or []
        if not choices:
            return None
        message = choices[0].get("message") or {}
        content = message.get("content") or []
        if isinstance(content, str):
            return content or None
        for part in content:
            if isinstance(part, dict) and part.get("text"):
                return str(part["text"])
        return None

    def _to_request_failed(self, exc: Exception) -> OcrRequestFailed:
        """Map an SDK/network exception to OcrRequestFailed with a code."""
        message = str(exc)
        low = message.lower()
        if "401" in low or "403" in low or "auth" in low or "api key" in low:
            code = AUTH_FAILED
        elif "timeout" in low or "timed out" in low or "network" in low or "connection" in low:
            code = NETWORK_ERROR
        else:
            code = OCR_REQUEST_FAILED
        return OcrRequestFailed(message, code=code, cause=exc)
