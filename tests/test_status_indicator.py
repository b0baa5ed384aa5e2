from __future__ import annotations

from models import OcrState
from status_indicator import STATE_COLORS, StatusIndicator


class FakeTray:
    def __init__(self) -> None:
        self.icon: object = None
        self.tooltip = ""
        self.visible = False
        self.calls: list[str] = []

    def setIcon(self, icon: object) -> None:  # noqa: N802
        self.icon = icon
        self.calls.append("setIcon")

    def setToolTip(self, tip: str) -> None:  # noqa: N802
        self.tooltip = tip

    def show(self) -> None:
        self.visible = True
        self.calls.append("show")

    def hide(self) -> None:
        self.visible = False
        self.calls.append("hide")


def _indicator() -> tuple[StatusIndicator, FakeTray, list[str]]:
    tray = FakeTray()
    made: list[str] = []

    def factory(color: str) -> str:
        made.append(color)
        return f"icon:{color}"

    return StatusIndicator(tray, icon_factory=factory), tray, made


def test_show_displays_marker_for_state() -> None:
    indicator, tray, _ = _indicator()

    indicator.show(OcrState.PROCESSING)

    assert tray.visible is True
    assert tray.icon == f"icon:{STATE_COLORS[OcrState.PROCESSING]}"
    assert indicator.current == OcrState.PROCESSING


def test_show_replaces_marker_in_place() -> None:
    indicator, tray, _ = _indicator()

    indicator.show(OcrState.PROCESSING)
    indicator.show(OcrState.SUCCESS)

    # one slot, shown once, icon swapped without hiding in between
    assert tray.calls == ["setIcon", "show", "setIcon"]
    assert tray.icon == f"icon:{STATE_COLORS[OcrState.SUCCESS]}"
    assert indicator.current == OcrState.SUCCESS


def test_each_state_has_distinct_color() -> None:
    assert len(set(STATE_COLORS.values())) == 3


def test_icons_are_cached_per_state() -> None:
    indicator, _, made = _indicator()

    indicator.show(OcrState.FAILURE)
    indicator.clear()
    indicator.show(OcrState.FAILURE)

    assert made == [STATE_COLORS[OcrState.FAILURE]]


def test_clear_hides_marker() -> None:
    indicator, tray, _ = _indicator()

    indicator.show(OcrState.FAILURE)
    indicator.clear()

    assert tray.visible is False
    assert indicator.current == OcrState.IDLE


def test_clear_without_marker_is_noop() -> None:
    indicator, tray, _ = _indicator()

    indicator.clear()
    indicator.clear()

    assert tray.calls == []


def test_show_idle_clears() -> None:
    indicator, tray, _ = _indicator()

    indicator.show(OcrState.SUCCESS)
    indicator.show(OcrState.IDLE)

    assert tray.visible is False
    assert indicator.current == OcrState.IDLE


def test_set_detail_extends_tooltip() -> None:
    indicator, tray, _ = _indicator()

    indicator.set_detail("ignored while hidden")
    assert tray.tooltip == ""

    indicator.show(OcrState.FAILURE)
    indicator.set_detail("No image found in clipboard.")
    assert tray.tooltip.endswith("No image found in clipboard.")
