from __future__ import annotations

from pathlib import Path


class AcquisitionError(Exception):
    """A battery attribute could not be turned into a value."""

    def __init__(self, device: str, attribute: str, path: Path, reason: str) -> None:
        self.device = device
        self.attribute = attribute
        self.path = path
        self.reason = reason
        super().__init__(f"{device}/{attribute}: {reason} ({path})")


class AttributeReadError(AcquisitionError):
    """The attribute file could not be opened or read."""


class AttributeConversionError(AcquisitionError):
    """The attribute was read but its content did not parse."""


class InvalidCapacityError(ValueError):
    pass
