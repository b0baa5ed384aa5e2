"""Core data models for the app."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OcrState(str, Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"

    @property
    def is_terminal(self) -> bool:
        return self in (OcrState.SUCCESS, OcrState.FAILURE)


@dataclass(frozen=True)
class ClipboardImage:
    png_bytes: bytes
    width: int = 0
    height: int = 0
