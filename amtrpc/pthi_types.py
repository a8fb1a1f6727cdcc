"""Message layouts and constants of the AMT host interface (PTHI)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

GET_REQUEST_SIZE = 12
CERT_HASH_MAX_LENGTH = 64
CERT_HASH_MAX_NUMBER = 33
NET_TLS_CERT_PKI_MAX_SERIAL_NUMS = 3
NET_TLS_CERT_PKI_MAX_SERIAL_NUM_LENGTH = 16
MPS_HOSTNAME_LENGTH = 256
IDER_LOG_ENTRIES = 6
MAJOR_VERSION = 1
MINOR_VERSION = 1
AMT_MAJOR_VERSION = 1
AMT_MINOR_VERSION = 1
BIOS_VERSION_LEN = 65
VERSIONS_NUMBER = 50
UNICODE_STRING_LEN = 20
ANSI_STRING_LEN = 1000

CFG_MAX_ACL_USER_LENGTH = 33
CFG_MAX_ACL_PWD_LENGTH = 33

PROVISIONING_MODE_REQUEST = 0x04000008
PROVISIONING_MODE_RESPONSE = 0x04800008
UNPROVISION_REQUEST = 0x04000010
UNPROVISION_RESPONSE = 0x04800010
PROVISIONING_STATE_REQUEST = 0x04000011
PROVISIONING_STATE_RESPONSE = 0x04800011
CODE_VERSIONS_REQUEST = 0x0400001A
CODE_VERSIONS_RESPONSE = 0x0480001A
GET_SECURITY_PARAMETERS_REQUEST = 0x0400001B
GET_SECURITY_PARAMETERS_RESPONSE = 0x0480001B
GET_MAC_ADDRESSES_REQUEST = 0x04000025
GET_MAC_ADDRESSES_RESPONSE = 0x04800025
GENERATE_RNG_SEED_REQUEST = 0x04000028
GENERATE_RNG_SEED_RESPONSE = 0x04800028
SET_PROVISIONING_SERVER_OTP_REQUEST = 0x0400002A
SET_PROVISIONING_SERVER_OTP_RESPONSE = 0x0480002A
SET_DNS_SUFFIX_REQUEST = 0x0400002F
SET_DNS_SUFFIX_RESPONSE = 0x0480002F
ENUMERATE_HASH_HANDLES_REQUEST = 0x0400002C
ENUMERATE_HASH_HANDLES_RESPONSE = 0x0480002C
GET_RNG_SEED_STATUS_REQUEST = 0x0400002E
GET_RNG_SEED_STATUS_RESPONSE = 0x0480002E
GET_DNS_SUFFIX_LIST_REQUEST = 0x0400003E
GET_DNS_SUFFIX_LIST_RESPONSE = 0x0480003E
SET_ENTERPRISE_ACCESS_REQUEST = 0x0400003F
SET_ENTERPRISE_ACCESS_RESPONSE = 0x0480003F
OPEN_USER_INITIATED_CONNECTION_REQUEST = 0x04000044
OPEN_USER_INITIATED_CONNECTION_RESPONSE = 0x04800044
CLOSE_USER_INITIATED_CONNECTION_REQUEST = 0x04000045
CLOSE_USER_INITIATED_CONNECTION_RESPONSE = 0x04800045
GET_REMOTE_ACCESS_CONNECTION_STATUS_REQUEST = 0x04000046
GET_REMOTE_ACCESS_CONNECTION_STATUS_RESPONSE = 0x04800046
GET_CURRENT_POWER_POLICY_REQUEST = 0x04000047
GET_CURRENT_POWER_POLICY_RESPONSE = 0x04800047
GET_LAN_INTERFACE_SETTINGS_REQUEST = 0x04000048
GET_LAN_INTERFACE_SETTINGS_RESPONSE = 0x04800048
GET_FEATURES_STATE_REQUEST = 0x04000049
GET_FEATURES_STATE_RESPONSE = 0x04800049
GET_LAST_HOST_RESET_REASON_REQUEST = 0x0400004A
GET_LAST_HOST_RESET_REASON_RESPONSE = 0x0480004A
GET_AMT_STATE_REQUEST = 0x01000001
GET_AMT_STATE_RESPONSE = 0x01800001
GET_ZERO_TOUCH_ENABLED_REQUEST = 0x04000030
GET_ZERO_TOUCH_ENABLED_RESPONSE = 0x04800030
GET_PROVISIONING_TLS_MODE_REQUEST = 0x0400002B
GET_PROVISIONING_TLS_MODE_RESPONSE = 0x0480002B
START_CONFIGURATION_REQUEST = 0x04000029
START_CONFIGURATION_RESPONSE = 0x04800029
GET_CERTHASH_ENTRY_REQUEST = 0x0400002D
GET_CERTHASH_ENTRY_RESPONSE = 0x0480002D
GET_PKI_FQDN_SUFFIX_REQUEST = 0x04000036
GET_PKI_FQDN_SUFFIX_RESPONSE = 0x04800036
SET_HOST_FQDN_REQUEST = 0x0400005B
SET_HOST_FQDN_RESPONSE = 0x0480005B
GET_FQDN_REQUEST = 0x4000056
GET_FQDN_RESPONSE = 0x4800056
GET_LOCAL_SYSTEM_ACCOUNT_REQUEST = 0x04000067
GET_LOCAL_SYSTEM_ACCOUNT_RESPONSE = 0x04800067
GET_EHBC_STATE_REQUEST = 0x4000084
GET_EHBC_STATE_RESPONSE = 0x4800084
GET_CONTROL_MODE_REQUEST = 0x400006B
GET_CONTROL_MODE_RESPONSE = 0x480006B
STOP_CONFIGURATION_REQUEST = 0x400005E
STOP_CONFIGURATION_RESPONSE = 0x480005E
GET_UUID_REQUEST = 0x400005C
GET_UUID_RESPONSE = 0x480005C

STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_CMD = 0x5
STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_SUBCMD = 0x51

_HEADER = struct.Struct("<BBHII")
_STATUS = struct.Struct("<I")
_ANSI_LENGTH = struct.Struct("<H")

MESSAGE_HEADER_SIZE = _HEADER.size
RESPONSE_HEADER_SIZE = _HEADER.size + _STATUS.size
ANSI_STRING_SIZE = _ANSI_LENGTH.size + ANSI_STRING_LEN


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


class AMTOperationalState(IntEnum):
    """Whether AMT is operational."""

    DISABLED = 0
    ENABLED = 1

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class MessageHeader:
    """Header that starts every PTHI request."""

    major_version: int = 0
    minor_version: int = 0
    reserved: int = 0
    command: int = 0
    length: int = 0

    def pack(self) -> bytes:
        """Encode the header in little-endian wire form."""
        try:
            return _HEADER.pack(
                self.major_version, self.minor_version, self.reserved, self.command, self.length
            )
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> MessageHeader:
        """Decode a header from the start of ``data``."""
        _require(data, _HEADER.size, "message header")
        return cls(*_HEADER.unpack_from(data))


@dataclass
class ResponseMessageHeader:
    """Header that starts every PTHI response: a request header and a status."""

    header: MessageHeader = field(default_factory=MessageHeader)
    status: int = 0

    def pack(self) -> bytes:
        """Encode the response header in little-endian wire form."""
        try:
            return self.header.pack() + _STATUS.pack(self.status)
        except struct.error as exc:
            raise ValueError(f"status out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> ResponseMessageHeader:
        """Decode a response header from the start of ``data``."""
        _require(data, RESPONSE_HEADER_SIZE, "response header")
        (status,) = _STATUS.unpack_from(data, _HEADER.size)
        return cls(MessageHeader.unpack(data), status)


@dataclass
class AMTUnicodeString:
    """A short length-prefixed string used in version descriptions."""

    length: int = 0
    string: bytes = bytes(UNICODE_STRING_LEN)


@dataclass
class AMTVersionType:
    """A named firmware component version."""

    description: AMTUnicodeString = field(default_factory=AMTUnicodeString)
    version: AMTUnicodeString = field(default_factory=AMTUnicodeString)


@dataclass
class CodeVersions:
    """BIOS version and the list of firmware component versions."""

    bios_version: bytes = bytes(BIOS_VERSION_LEN)
    versions_count: int = 0
    versions: list[AMTVersionType] = field(default_factory=list)


@dataclass
class AMTANSIString:
    """A length-prefixed byte string with a fixed 1000-byte buffer."""

    length: int = 0
    buffer: bytes = b""

    def __post_init__(self) -> None:
        if len(self.buffer) > ANSI_STRING_LEN:
            raise ValueError(f"buffer longer than {ANSI_STRING_LEN} bytes")

    def pack(self) -> bytes:
        """Encode the length and the zero-padded buffer."""
        if not 0 <= self.length <= 0xFFFF:
            raise ValueError(f"length {self.length} out of range")
        return _ANSI_LENGTH.pack(self.length) + self.buffer.ljust(ANSI_STRING_LEN, b"\x00")

    @classmethod
    def unpack(cls, data: bytes) -> AMTANSIString:
        """Decode a string from the start of ``data``."""
        _require(data, ANSI_STRING_SIZE, "ANSI string")
        (length,) = _ANSI_LENGTH.unpack_from(data)
        return cls(length, bytes(data[_ANSI_LENGTH.size : ANSI_STRING_SIZE]))

    def text(self) -> str:
        """Return the first ``length`` bytes of the buffer as text."""
        if self.length <= 0:
            return ""
        return self.buffer[: self.length].decode("utf-8", errors="replace")


@dataclass
class LocalSystemAccount:
    """Credentials of the local system account, as fixed-size byte fields."""

    username: bytes = bytes(CFG_MAX_ACL_USER_LENGTH)
    password: bytes = bytes(CFG_MAX_ACL_PWD_LENGTH)


@dataclass
class LANInterfaceSettings:
    """Settings of a wired or wireless LAN interface."""

    header: ResponseMessageHeader = field(default_factory=ResponseMessageHeader)
    enabled: int = 0
    ipv4_address: int = 0
    dhcp_enabled: int = 0
    dhcp_ip_mode: int = 0
    link_status: int = 0
    mac_address: bytes = bytes(6)


@dataclass
class AMTHashHandles:
    """Handles of the certificate hashes stored in the firmware."""

    length: int = 0
    handles: list[int] = field(default_factory=list)


@dataclass
class CertHashEntry:
    """A trusted root certificate hash stored in the firmware."""

    is_default: int = 0
    is_active: int = 0
    certificate_hash: bytes = bytes(CERT_HASH_MAX_LENGTH)
    hash_algorithm: int = 0
    name: AMTANSIString = field(default_factory=AMTANSIString)


@dataclass
class RemoteAccessConnectionStatus:
    """State of the remote access (CIRA) connection."""

    header: ResponseMessageHeader = field(default_factory=ResponseMessageHeader)
    network_status: int = 0
    remote_status: int = 0
    remote_trigger: int = 0
    mps_hostname: AMTANSIString = field(default_factory=AMTANSIString)