from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeVar

from .errors import AttributeConversionError, AttributeReadError

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SYSFS_ROOT = Path("/sys/class/power_supply")


def attribute_path(
    device: str, attribute: str, sysfs_root: Path = DEFAULT_SYSFS_ROOT
) -> Path:
    """Return the file holding ``attribute`` for ``device``.

    The device name is joined as-is: a name containing ``..`` or a slash
    points outside the power-supply directory.
    """
    return sysfs_root / device / attribute


def parse_unsigned(text: str) -> int:
    # int() alone also takes signs, underscores and non-ASCII digits.
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"expected an unsigned integer, got {text!r}")
    return int(text)


def read_attribute(
    device: str,
    attribute: str,
    parse: Callable[[str], T],
    sysfs_root: Path = DEFAULT_SYSFS_ROOT,
) -> T:
    path = attribute_path(device, attribute, sysfs_root)
    try:
        raw = path.read_text()
    except UnicodeDecodeError as exc:
        raise AttributeReadError(
            device, attribute, path, "content is not text"
        ) from exc
    except OSError as exc:
        raise AttributeReadError(
            device, attribute, path, exc.strerror or str(exc)
        ) from exc

    raw = raw.strip()
    try:
        value = parse(raw)
    except ValueError as exc:
        log.debug("Unparsable value in %s: %r", path, raw)
        raise AttributeConversionError(
            device, attribute, path, f"cannot parse {raw!r}"
        ) from exc
    log.debug("Read %s=%r from %s", attribute, value, path)
    return value
