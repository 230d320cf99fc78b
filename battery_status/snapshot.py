from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .errors import InvalidCapacityError
from .sysfs import DEFAULT_SYSFS_ROOT, parse_unsigned, read_attribute

log = logging.getLogger(__name__)

UNKNOWN_DURATION = "--:--"


class ChargeStatus(Enum):
    CHARGING = "Charging"
    DISCHARGING = "Discharging"
    FULL = "Full"

    @classmethod
    def parse(cls, text: str) -> "ChargeStatus":
        # Exact match only: "charging" or "Not charging" are rejected.
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f"unknown charge status {text!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BatterySnapshot:
    """All attributes of one battery, read at one point in time.

    Charges are in µAh and currents in µA, as the kernel reports them.
    """

    name: str
    charge_now: int
    charge_full: int
    charge_full_design: int
    cycle_count: int
    charge_status: ChargeStatus
    current_now: int
    current_avg: int

    def percent_remaining(self) -> int:
        percent = _ratio_pct(self.charge_now, self.charge_full, "charge_full")
        # charge_now can drift slightly above charge_full.
        return min(percent, 100)

    def abs_percent_remaining(self) -> int:
        return _ratio_pct(
            self.charge_now, self.charge_full_design, "charge_full_design"
        )

    def health(self) -> int:
        return _ratio_pct(
            self.charge_full, self.charge_full_design, "charge_full_design"
        )

    def hours_remaining(self) -> Optional[float]:
        """Hours until full (charging) or empty (discharging).

        ``None`` when the average current is zero, since no estimate is
        possible.
        """
        if self.charge_status is ChargeStatus.FULL:
            return 0.0
        if self.current_avg == 0:
            return None
        if self.charge_status is ChargeStatus.CHARGING:
            missing = max(self.charge_full - self.charge_now, 0)
            return missing / self.current_avg
        return self.charge_now / self.current_avg

    def time_remaining(self) -> str:
        return format_duration(self.hours_remaining())


def _ratio_pct(numerator: int, denominator: int, name: str) -> int:
    if denominator == 0:
        raise InvalidCapacityError(f"{name} is zero")
    return (numerator * 100) // denominator


def format_duration(hours: Optional[float]) -> str:
    if hours is None:
        return UNKNOWN_DURATION
    whole_hours = int(hours)
    minutes = round((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0
    return f"{whole_hours:02d}:{minutes:02d}"


def acquire(device: str, sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> BatterySnapshot:
    """Read every attribute of ``device`` into a snapshot.

    The first attribute that fails raises its ``AcquisitionError`` and the
    remaining ones are not read.
    """

    def read_unsigned(attribute: str) -> int:
        return read_attribute(device, attribute, parse_unsigned, sysfs_root)

    snapshot = BatterySnapshot(
        name=device,
        charge_now=read_unsigned("charge_now"),
        charge_full=read_unsigned("charge_full"),
        charge_full_design=read_unsigned("charge_full_design"),
        cycle_count=read_unsigned("cycle_count"),
        charge_status=read_attribute(
            device, "status", ChargeStatus.parse, sysfs_root
        ),
        current_now=read_unsigned("current_now"),
        current_avg=read_unsigned("current_avg"),
    )
    log.debug("Acquired snapshot for %s: %s", device, snapshot)
    return snapshot
