from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidCapacityError
from .snapshot import BatterySnapshot, ChargeStatus

CRITICAL_LEVEL = 5

# Font Awesome glyphs
ICON_PLUG = "\uf1e6"
ICON_CHECK = "\uf00c"
ICON_FULL = "\uf240"
ICON_THREE_QUARTERS = "\uf241"
ICON_HALF = "\uf242"
ICON_QUARTER = "\uf243"
ICON_EMPTY = "\uf244"

# Solarized accents
GREEN = "#859900"
CYAN = "#2AA198"
YELLOW = "#B58900"
ORANGE = "#CB4B16"
RED = "#DC322F"
# Text colour at or below CRITICAL_LEVEL, where i3blocks paints the block red.
BG = "#073642"


class Severity(Enum):
    CRITICAL = (0, 10, ICON_EMPTY, RED)
    LOW = (11, 35, ICON_QUARTER, ORANGE)
    MEDIUM = (36, 60, ICON_HALF, YELLOW)
    HIGH = (61, 85, ICON_THREE_QUARTERS, CYAN)
    FULL_RANGE = (86, 100, ICON_FULL, GREEN)

    def __init__(self, low: int, high: int, icon: str, color: str) -> None:
        self.low = low
        self.high = high
        self.icon = icon
        self.color = color

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


FULLY_CHARGED = "fully charged"


@dataclass(frozen=True)
class DisplayState:
    percent: int
    category: str
    icon: str
    color: str


def severity_for(percent: int) -> Severity:
    for severity in Severity:
        if severity.low <= percent <= severity.high:
            return severity
    raise ValueError(f"percent out of range: {percent}")


def display_state(snapshot: BatterySnapshot) -> DisplayState:
    if snapshot.charge_status is ChargeStatus.FULL:
        return DisplayState(
            percent=100, category=FULLY_CHARGED, icon=ICON_CHECK, color=GREEN
        )

    percent = snapshot.percent_remaining()
    severity = severity_for(percent)
    icon = severity.icon
    if snapshot.charge_status is ChargeStatus.CHARGING:
        icon = ICON_PLUG
    color = BG if is_critical(percent) else severity.color
    return DisplayState(
        percent=percent, category=severity.label, icon=icon, color=color
    )


def status_line(state: DisplayState) -> str:
    return (
        f'<span color="{state.color}" font_desc="Font Awesome"> {state.icon} </span>'
        f"{state.percent}%"
    )


def is_critical(percent: int) -> bool:
    return percent <= CRITICAL_LEVEL


def _metric(func, suffix: str) -> str:
    try:
        return f"{func()}{suffix}"
    except InvalidCapacityError:
        return "--"


def detail_rows(snapshot: BatterySnapshot) -> list[tuple[str, str]]:
    """Label/value pairs for the detail view, in display order."""
    return [
        ("Battery name", snapshot.name),
        ("Battery charge", f"{snapshot.charge_now} µAh"),
        ("Charge when full", f"{snapshot.charge_full} µAh"),
        ("Design full", f"{snapshot.charge_full_design} µAh"),
        ("Cycle count", f"{snapshot.cycle_count} cycles"),
        ("Status", str(snapshot.charge_status)),
        ("Current now", f"{snapshot.current_now} µA"),
        ("Avg current", f"{snapshot.current_avg} µA"),
        ("% Remaining", _metric(snapshot.percent_remaining, "%")),
        ("Time remaining", f"{snapshot.time_remaining()} hrs"),
        ("Battery health", _metric(snapshot.health, "%")),
        ("Abs % remaining", _metric(snapshot.abs_percent_remaining, "%")),
    ]
