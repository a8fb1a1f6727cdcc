"""Access to the host-embedded controller interface (MEI device)."""

from __future__ import annotations

import logging
import os
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass

try:
    import fcntl
except ImportError:  # not available on this platform
    fcntl = None

log = logging.getLogger(__name__)

DEVICE = "/dev/mei0"
IOCTL_MEI_CONNECT_CLIENT = 0xC0104801

# PTHI
MEI_IAMTHIF = bytes(
    [0x28, 0x00, 0xF8, 0x12, 0xB7, 0xB4, 0x2D, 0x4B, 0xAC, 0xA8, 0x46, 0xE0, 0xFF, 0x65, 0x81, 0x4C]
)
# LME
MEI_LMEIF = bytes(
    [0xDB, 0xA4, 0x33, 0x67, 0x76, 0x04, 0x7B, 0x4E, 0xB3, 0xAF, 0xBC, 0xFC, 0x29, 0xBE, 0xE7, 0xA7]
)
# Watchdog
MEI_WDIF = bytes(
    [0x6F, 0x9A, 0xB7, 0x05, 0x28, 0x46, 0x7F, 0x4D, 0x89, 0x9D, 0xA9, 0x15, 0x14, 0xCB, 0x32, 0xAB]
)

_CONNECT_ATTEMPTS = 3
_CONNECT_DATA_SIZE = 16
_CONNECT_CLIENT_FORMAT = struct.Struct("<IB3s")


class HeciError(OSError):
    """Raised when the MEI device cannot be opened or used."""


class HeciInterface(ABC):
    """A transport that exchanges messages with a firmware client."""

    @abstractmethod
    def init(self, use_lme: bool = False, use_wd: bool = False) -> None:
        """Open the device and connect to the selected client."""

    @abstractmethod
    def get_buffer_size(self) -> int:
        """Return the maximum message length of the connected client."""

    @abstractmethod
    def send_message(self, buffer: bytes) -> int:
        """Send a message and return the number of bytes written."""

    @abstractmethod
    def receive_message(self, size: int) -> bytes:
        """Receive at most ``size`` bytes."""

    @abstractmethod
    def close(self) -> None:
        """Release the device."""


@dataclass(frozen=True)
class ConnectClientData:
    """Properties returned by the driver after connecting to a client."""

    max_message_length: int
    protocol_version: int
    reserved: bytes = b"\x00\x00\x00"

    @classmethod
    def from_bytes(cls, data: bytes) -> ConnectClientData:
        """Decode the little-endian client properties."""
        if len(data) < _CONNECT_CLIENT_FORMAT.size:
            raise ValueError(
                f"client properties need {_CONNECT_CLIENT_FORMAT.size} bytes, got {len(data)}"
            )
        length, version, reserved = _CONNECT_CLIENT_FORMAT.unpack_from(data)
        return cls(length, version, reserved)


def client_guid(use_lme: bool = False, use_wd: bool = False) -> bytes:
    """Return the GUID of the client to connect to; watchdog wins over LME."""
    if use_wd:
        return MEI_WDIF
    if use_lme:
        return MEI_LMEIF
    return MEI_IAMTHIF


class LinuxDriver(HeciInterface):
    """MEI access through the Linux character device."""

    def __init__(self, device: str = DEVICE) -> None:
        self.device = device
        self._fd: int | None = None
        self._buffer_size = 0
        self.protocol_version = 0

    def init(self, use_lme: bool = False, use_wd: bool = False) -> None:
        if fcntl is None:
            raise HeciError("MEI device access is not supported on this platform")
        try:
            fd = os.open(self.device, os.O_RDWR)
        except PermissionError as exc:
            log.error("need administrator privileges")
            raise HeciError(f"cannot open {self.device}: permission denied") from exc
        except FileNotFoundError as exc:
            log.error("AMT not found: MEI/driver is missing or the call to the HECI driver failed")
            raise HeciError(f"cannot open {self.device}: no such file or directory") from exc
        except OSError as exc:
            log.error("Cannot open MEI Device")
            raise HeciError(f"cannot open {self.device}: {exc}") from exc

        data = bytearray(client_guid(use_lme, use_wd).ljust(_CONNECT_DATA_SIZE, b"\x00"))
        last_error: OSError | None = None
        # the device may still be busy from a previous call
        for _ in range(_CONNECT_ATTEMPTS):
            try:
                fcntl.ioctl(fd, IOCTL_MEI_CONNECT_CLIENT, data, True)
                break
            except OSError as exc:
                last_error = exc
        else:
            os.close(fd)
            raise HeciError(f"cannot connect to MEI client: {last_error}") from last_error

        properties = ConnectClientData.from_bytes(bytes(data))
        self._fd = fd
        self._buffer_size = properties.max_message_length
        self.protocol_version = properties.protocol_version

    def get_buffer_size(self) -> int:
        return self._buffer_size

    def _require_fd(self) -> int:
        if self._fd is None:
            raise HeciError("MEI device is not open")
        return self._fd

    def send_message(self, buffer: bytes) -> int:
        return os.write(self._require_fd(), buffer)

    def receive_message(self, size: int) -> bytes:
        return os.read(self._require_fd(), size)

    def close(self) -> None:
        if self._fd is None:
            return
        try:
            os.close(self._fd)
        except OSError as exc:
            log.error(exc)
        finally:
            self._fd = None

    def __enter__(self) -> LinuxDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()