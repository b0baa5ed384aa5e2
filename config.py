"""Credential resolution and persisted shortcut settings."""

from __future__ import annotations

import io
import json
import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv.parser import parse_stream

from errors import MissingCredentialError

logger = logging.getLogger(__name__)

API_KEY_ENV = "DASHSCOPE_API_KEY"
CONFIG_HOME_ENV = "XDG_CONFIG_HOME"
DEFAULT_CONFIG_HOME = Path("~/.config")
APP_DIR_NAME = "clip2text"
ENV_FILE_NAME = ".env"
SETTINGS_FILE_NAME = "settings.json"

DEFAULT_HOTKEY = "<ctrl>+<cmd>+<shift>+5"


def config_dir(
    environ: Mapping[str, str] | None = None,
    config_base: Path | None = None,
) -> Path:
    """Return ``<base>/clip2text`` where base is XDG_CONFIG_HOME or ~/.config."""
    env = os.environ if environ is None else environ
    if config_base is None:
        override = env.get(CONFIG_HOME_ENV, "")
        config_base = Path(override) if override else DEFAULT_CONFIG_HOME
    return config_base.expanduser() / APP_DIR_NAME


def read_env_file_value(path: Path, key: str = API_KEY_ENV) -> str:
    """Return the trimmed value of the first non-empty ``key=value`` line for ``key``.

    Lines without ``=``, comments and other keys are skipped. A missing or
    unreadable file yields an empty string.
    """
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""

    for binding in parse_stream(io.StringIO(contents)):
        if binding.key is None or binding.value is None:
            continue
        if binding.key.strip() == key and binding.value.strip():
            return binding.value.strip()
    return ""


def resolve_credential(
    environ: Mapping[str, str] | None = None,
    config_base: Path | None = None,
) -> str:
    env = os.environ if environ is None else environ

    value = env.get(API_KEY_ENV, "").strip()
    if value:
        logger.debug("Using API key from $%s", API_KEY_ENV)
        return value

    env_file = config_dir(env, config_base) / ENV_FILE_NAME
    value = read_env_file_value(env_file)
    if value:
        logger.debug("Using API key from %s", env_file)
        return value

    raise MissingCredentialError()


class ShortcutStore:
    """JSON-backed storage for the user's global shortcut binding."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or config_dir() / SETTINGS_FILE_NAME

    def get_hotkey(self) -> str | None:
        value = self._read_all().get("hotkey")
        if not value:
            return None
        return str(value)

    def set_hotkey(self, hotkey: str) -> None:
        data = self._read_all()
        data["hotkey"] = hotkey
        self._write_all(data)

    def ensure_default_hotkey(self) -> str:
        current = self.get_hotkey()
        if current:
            return current
        self.set_hotkey(DEFAULT_HOTKEY)
        return DEFAULT_HOTKEY

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
