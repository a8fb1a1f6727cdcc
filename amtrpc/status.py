"""Status codes returned by the AMT firmware."""

from __future__ import annotations

from enum import IntEnum

_UNKNOWN = "AMT_STATUS_UNKNOWN"


class Status(IntEnum):
    """Result code of a firmware request."""

    SUCCESS = 0
    INTERNAL_ERROR = 1
    NOT_READY = 2
    INVALID_AMT_MODE = 3
    INVALID_MESSAGE_LENGTH = 4
    NOT_PERMITTED = 16
    MAX_LIMIT_REACHED = 23
    INVALID_PARAMETER = 36
    RNG_GENERATION_IN_PROGRESS = 47
    RNG_NOT_READY = 48
    CERTIFICATE_NOT_READY = 49
    INVALID_HANDLE = 2053
    NOT_FOUND = 2068

    def __str__(self) -> str:
        return f"AMT_STATUS_{self.name}"


def status_name(value: int) -> str:
    """Return the firmware name of a status code, or AMT_STATUS_UNKNOWN."""
    try:
        return str(Status(value))
    except ValueError:
        return _UNKNOWN