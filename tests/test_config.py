from __future__ import annotations

from pathlib import Path

import pytest

from config import (
    API_KEY_ENV,
    DEFAULT_HOTKEY,
    ShortcutStore,
    config_dir,
    read_env_file_value,
    resolve_credential,
)
from errors import MISSING_CREDENTIAL, MissingCredentialError


def _write_env(base: Path, contents: str) -> Path:
    path = base / "clip2text" / ".env"
    path.parent.mkdir(parents=True)
    path.write_text(contents, encoding="utf-8")
    return path


def test_environment_variable_is_used() -> None:
    assert resolve_credential(environ={API_KEY_ENV: "abc123"}) == "abc123"


def test_environment_variable_wins_over_config_file(tmp_path: Path) -> None:
    _write_env(tmp_path, "DASHSCOPE_API_KEY=from-file\n")

    key = resolve_credential(environ={API_KEY_ENV: "from-env"}, config_base=tmp_path)
    assert key == "from-env"


def test_config_file_used_when_env_missing(tmp_path: Path) -> None:
    _write_env(tmp_path, "DASHSCOPE_API_KEY=from-file\n")
    assert resolve_credential(environ={}, config_base=tmp_path) == "from-file"


def test_xdg_config_home_selects_config_base(tmp_path: Path) -> None:
    _write_env(tmp_path, "DASHSCOPE_API_KEY=xdg\n")
    assert resolve_credential(environ={"XDG_CONFIG_HOME": str(tmp_path)}) == "xdg"


def test_config_dir_defaults_to_dot_config() -> None:
    assert config_dir(environ={}) == Path("~/.config").expanduser() / "clip2text"


@pytest.mark.parametrize(
    "line",
    [
        "DASHSCOPE_API_KEY=abc123",
        "  DASHSCOPE_API_KEY=abc123  ",
        "DASHSCOPE_API_KEY =   abc123",
        "\tDASHSCOPE_API_KEY=\tabc123\t",
    ],
)
def test_config_file_values_are_trimmed(tmp_path: Path, line: str) -> None:
    path = _write_env(tmp_path, line + "\n")
    value = read_env_file_value(path)
    assert value == "abc123"
    assert value == value.strip()


def test_malformed_lines_are_skipped(tmp_path: Path) -> None:
    path = _write_env(
        tmp_path,
        "# comment\n"
        "garbage without equals\n"
        "OTHER_KEY=nope\n"
        "\n"
        "DASHSCOPE_API_KEY=real\n",
    )
    assert read_env_file_value(path) == "real"


def test_first_matching_line_wins(tmp_path: Path) -> None:
    path = _write_env(tmp_path, "DASHSCOPE_API_KEY=first\nDASHSCOPE_API_KEY=second\n")
    assert read_env_file_value(path) == "first"


def test_missing_config_file_is_a_miss(tmp_path: Path) -> None:
    assert read_env_file_value(tmp_path / "nope" / ".env") == ""


def test_missing_everywhere_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingCredentialError) as info:
        resolve_credential(environ={}, config_base=tmp_path)
    assert info.value.code == MISSING_CREDENTIAL


def test_blank_values_do_not_count(tmp_path: Path) -> None:
    _write_env(tmp_path, "DASHSCOPE_API_KEY=   \n")
    with pytest.raises(MissingCredentialError):
        resolve_credential(environ={API_KEY_ENV: "  "}, config_base=tmp_path)


def test_shortcut_store_writes_default_once(tmp_path: Path) -> None:
    path = tmp_path / "clip2text" / "settings.json"
    store = ShortcutStore(path=path)

    assert store.get_hotkey() is None
    assert store.ensure_default_hotkey() == DEFAULT_HOTKEY
    assert ShortcutStore(path=path).get_hotkey() == DEFAULT_HOTKEY


def test_shortcut_store_keeps_custom_binding(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    store = ShortcutStore(path=path)
    store.set_hotkey("<ctrl>+<alt>+o")

    reloaded = ShortcutStore(path=path)
    assert reloaded.ensure_default_hotkey() == "<ctrl>+<alt>+o"
    assert reloaded.get_hotkey() == "<ctrl>+<alt>+o"


def test_shortcut_store_invalid_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{invalid", encoding="utf-8")

    store = ShortcutStore(path=path)
    assert store.get_hotkey() is None
    assert store.ensure_default_hotkey() == DEFAULT_HOTKEY
