from pathlib import Path

import pytest

from battery_status.errors import (
    AttributeConversionError,
    AttributeReadError,
    InvalidCapacityError,
)
from battery_status.snapshot import (
    UNKNOWN_DURATION,
    BatterySnapshot,
    ChargeStatus,
    acquire,
    format_duration,
)


def _write_battery(root: Path, name: str = "BAT0", **overrides: str) -> Path:
    values = {
        "charge_now": "50",
        "charge_full": "100",
        "charge_full_design": "120",
        "cycle_count": "312",
        "status": "Discharging",
        "current_now": "30",
        "current_avg": "25",
    }
    values.update(overrides)
    bat = root / name
    bat.mkdir()
    for attribute, value in values.items():
        (bat / attribute).write_text(f"{value}\n")
    return bat


def _snapshot(**overrides) -> BatterySnapshot:
    fields = dict(
        name="BAT0",
        charge_now=50,
        charge_full=100,
        charge_full_design=120,
        cycle_count=312,
        charge_status=ChargeStatus.DISCHARGING,
        current_now=30,
        current_avg=25,
    )
    fields.update(overrides)
    return BatterySnapshot(**fields)


@pytest.mark.parametrize("status", list(ChargeStatus))
def test_charge_status_round_trips(status: ChargeStatus):
    assert ChargeStatus.parse(str(status)) is status


@pytest.mark.parametrize("text", ["charging", "FULL", "Not charging", "Unknown", ""])
def test_charge_status_rejects_other_text(text: str):
    with pytest.raises(ValueError):
        ChargeStatus.parse(text)


def test_acquire_reads_all_attributes(tmp_path: Path):
    _write_battery(tmp_path)

    snapshot = acquire("BAT0", sysfs_root=tmp_path)

    assert snapshot == _snapshot()


def test_snapshot_is_immutable():
    snapshot = _snapshot()

    with pytest.raises(AttributeError):
        snapshot.charge_now = 10  # type: ignore[misc]


def test_reference_metrics():
    snapshot = _snapshot()

    assert snapshot.percent_remaining() == 50
    assert snapshot.abs_percent_remaining() == 41
    assert snapshot.health() == 83
    assert snapshot.time_remaining() == "02:00"


def test_unrecognized_status_fails_acquisition(tmp_path: Path):
    _write_battery(tmp_path, status="Unplugged")

    with pytest.raises(AttributeConversionError) as excinfo:
        acquire("BAT0", sysfs_root=tmp_path)

    assert excinfo.value.attribute == "status"


def test_missing_device_fails_on_first_attribute(tmp_path: Path):
    with pytest.raises(AttributeReadError) as excinfo:
        acquire("BAT1", sysfs_root=tmp_path)

    assert excinfo.value.attribute == "charge_now"


def test_acquire_stops_at_first_failure(tmp_path: Path, monkeypatch):
    bat = _write_battery(tmp_path)
    (bat / "charge_full_design").unlink()

    from battery_status import snapshot as snapshot_module

    seen = []
    real_read = snapshot_module.read_attribute

    def recording_read(device, attribute, parse, sysfs_root):
        seen.append(attribute)
        return real_read(device, attribute, parse, sysfs_root)

    monkeypatch.setattr(snapshot_module, "read_attribute", recording_read)

    with pytest.raises(AttributeReadError) as excinfo:
        snapshot_module.acquire("BAT0", sysfs_root=tmp_path)

    assert excinfo.value.attribute == "charge_full_design"
    assert seen == ["charge_now", "charge_full", "charge_full_design"]


@pytest.mark.parametrize(
    "charge_now, charge_full", [(0, 100), (99, 100), (100, 100), (103, 100), (500, 1)]
)
def test_percent_remaining_is_clamped(charge_now: int, charge_full: int):
    snapshot = _snapshot(charge_now=charge_now, charge_full=charge_full)

    assert 0 <= snapshot.percent_remaining() <= 100


def test_abs_percent_is_not_clamped():
    snapshot = _snapshot(charge_now=130, charge_full=130, charge_full_design=100)

    assert snapshot.percent_remaining() == 100
    assert snapshot.abs_percent_remaining() == 130


def test_health_is_full_for_new_battery():
    assert _snapshot(charge_full=4000, charge_full_design=4000).health() == 100


def test_zero_capacity_raises():
    with pytest.raises(InvalidCapacityError):
        _snapshot(charge_full=0).percent_remaining()
    with pytest.raises(InvalidCapacityError):
        _snapshot(charge_full_design=0).health()
    with pytest.raises(InvalidCapacityError):
        _snapshot(charge_full_design=0).abs_percent_remaining()


def test_time_remaining_while_charging():
    snapshot = _snapshot(
        charge_now=1000,
        charge_full=4000,
        charge_status=ChargeStatus.CHARGING,
        current_avg=2000,
    )

    assert snapshot.hours_remaining() == 1.5
    assert snapshot.time_remaining() == "01:30"


def test_time_remaining_when_full_is_zero():
    snapshot = _snapshot(charge_status=ChargeStatus.FULL, current_avg=0)

    assert snapshot.time_remaining() == "00:00"


@pytest.mark.parametrize("status", [ChargeStatus.CHARGING, ChargeStatus.DISCHARGING])
def test_zero_average_current_reports_unknown(status: ChargeStatus):
    snapshot = _snapshot(charge_status=status, current_avg=0)

    assert snapshot.hours_remaining() is None
    assert snapshot.time_remaining() == UNKNOWN_DURATION


def test_charging_above_full_counts_as_nothing_left():
    snapshot = _snapshot(
        charge_now=105, charge_full=100, charge_status=ChargeStatus.CHARGING
    )

    assert snapshot.time_remaining() == "00:00"


@pytest.mark.parametrize(
    "hours, expected",
    [
        (0.0, "00:00"),
        (2.25, "02:15"),
        (0.999, "01:00"),
        (12.5, "12:30"),
        (None, "--:--"),
    ],
)
def test_format_duration(hours, expected):
    assert format_duration(hours) == expected
