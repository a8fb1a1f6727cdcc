"""Commands of the AMT host interface (PTHI) sent over the MEI transport."""

from __future__ import annotations

import struct

from amtrpc.heci import HeciInterface, LinuxDriver
from amtrpc.pthi_types import (
    ANSI_STRING_SIZE,
    BIOS_VERSION_LEN,
    CERT_HASH_MAX_LENGTH,
    CERT_HASH_MAX_NUMBER,
    CFG_MAX_ACL_PWD_LENGTH,
    CFG_MAX_ACL_USER_LENGTH,
    CODE_VERSIONS_REQUEST,
    ENUMERATE_HASH_HANDLES_REQUEST,
    GET_CERTHASH_ENTRY_REQUEST,
    GET_CONTROL_MODE_REQUEST,
    GET_LAN_INTERFACE_SETTINGS_REQUEST,
    GET_LOCAL_SYSTEM_ACCOUNT_REQUEST,
    GET_PKI_FQDN_SUFFIX_REQUEST,
    GET_REMOTE_ACCESS_CONNECTION_STATUS_REQUEST,
    GET_REQUEST_SIZE,
    GET_UUID_REQUEST,
    RESPONSE_HEADER_SIZE,
    STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_CMD,
    STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_SUBCMD,
    UNICODE_STRING_LEN,
    UNPROVISION_REQUEST,
    VERSIONS_NUMBER,
    AMTANSIString,
    AMTHashHandles,
    AMTOperationalState,
    AMTUnicodeString,
    AMTVersionType,
    CertHashEntry,
    CodeVersions,
    LANInterfaceSettings,
    LocalSystemAccount,
    MessageHeader,
    RemoteAccessConnectionStatus,
    ResponseMessageHeader,
)
from amtrpc.status import Status

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_STATE_INDEPENDENCE_VERSION = 0x10
_SET_OPERATIONAL_STATE_SUBCMD = 0x53
_LOCAL_SYSTEM_ACCOUNT_RESERVED = 40


class PTHIError(Exception):
    """Raised when the firmware exchange does not complete as expected."""


class _Reader:
    """Sequential little-endian reader that yields zeros past the end of the data."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk.ljust(size, b"\x00")

    def u8(self) -> int:
        return self.take(1)[0]

    def u16(self) -> int:
        return _U16.unpack(self.take(_U16.size))[0]

    def u32(self) -> int:
        return _U32.unpack(self.take(_U32.size))[0]

    def response_header(self) -> ResponseMessageHeader:
        return ResponseMessageHeader.unpack(self.take(RESPONSE_HEADER_SIZE))

    def ansi_string(self) -> AMTANSIString:
        return AMTANSIString.unpack(self.take(ANSI_STRING_SIZE))

    def unicode_string(self) -> AMTUnicodeString:
        length = self.u16()
        return AMTUnicodeString(length, self.take(UNICODE_STRING_LEN))


def _as_status(value: int) -> Status | int:
    try:
        return Status(value)
    except ValueError:
        return value


def create_request_header(command: int, length: int) -> MessageHeader:
    """Build a version 1.1 request header for ``command`` with a body of ``length`` bytes."""
    return MessageHeader(
        major_version=1, minor_version=1, reserved=0, command=command, length=length
    )


def _get_request(command: int) -> bytes:
    return create_request_header(command, 0).pack()


class PTHICommand:
    """Issues PTHI requests to the firmware and decodes the responses."""

    def __init__(self, heci: HeciInterface | None = None) -> None:
        self.heci = heci if heci is not None else LinuxDriver()

    def __enter__(self) -> PTHICommand:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open(self, use_lme: bool = False) -> None:
        """Connect to the PTHI client, or to the LME client when ``use_lme`` is set."""
        self.heci.init(use_lme, False)

    def open_watchdog(self) -> None:
        """Connect to the watchdog client."""
        self.heci.init(False, True)

    def close(self) -> None:
        self.heci.close()

    def send(self, command: bytes, command_size: int | None = None) -> None:
        """Send ``command``, checking that all of it was written."""
        if command_size is not None and command_size != len(command):
            raise ValueError(
                f"command size {command_size} does not match command length {len(command)}"
            )
        written = self.heci.send_message(command)
        if written != len(command):
            raise PTHIError("amt internal error")

    def receive(self) -> tuple[bytes, int]:
        """Read one message; return the buffer-sized data and the number of bytes read."""
        size = self.heci.get_buffer_size()
        data = self.heci.receive_message(size)
        return bytes(data).ljust(size, b"\x00"), len(data)

    def call(self, command: bytes, command_size: int | None = None) -> bytes:
        """Send ``command`` and return the response, zero-padded to the buffer size."""
        self.send(command, command_size)
        result, read = self.receive()
        if read == 0:
            raise PTHIError("empty response from AMT")
        return result

    def get_code_versions(self) -> CodeVersions:
        result = self.call(_get_request(CODE_VERSIONS_REQUEST), GET_REQUEST_SIZE)
        reader = _Reader(result)
        reader.response_header()
        bios_version = reader.take(BIOS_VERSION_LEN)
        count = reader.u32()
        versions = [
            AMTVersionType(reader.unicode_string(), reader.unicode_string())
            for _ in range(min(count, VERSIONS_NUMBER))
        ]
        return CodeVersions(bios_version, count, versions)

    def get_uuid(self) -> str:
        result = self.call(_get_request(GET_UUID_REQUEST), GET_REQUEST_SIZE)
        reader = _Reader(result)
        reader.response_header()
        return reader.take(16).decode("latin-1")

    def get_control_mode(self) -> int:
        result = self.call(_get_request(GET_CONTROL_MODE_REQUEST), GET_REQUEST_SIZE)
        reader = _Reader(result)
        reader.response_header()
        return reader.u32()

    def get_is_amt_enabled(self) -> int:
        command = bytes(
            [
                STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_CMD,
                0x2,
                STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_SUBCMD,
                _STATE_INDEPENDENCE_VERSION,
            ]
        )
        result = self.call(command, len(command))
        return result[0]

    def set_amt_operational_state(self, state: AMTOperationalState) -> Status | int:
        """Enable or disable AMT; return the firmware status of the request."""
        command = bytes(
            [
                STATE_INDEPENDENCE_IS_CHANGE_TO_AMT_ENABLED_CMD,
                0x3,
                _SET_OPERATIONAL_STATE_SUBCMD,
                _STATE_INDEPENDENCE_VERSION,
                int(state),
            ]
        )
        result = self.call(command, len(command))
        reader = _Reader(result)
        reader.take(4)
        return _as_status(reader.u32())

    def unprovision(self) -> int:
        command = create_request_header(UNPROVISION_REQUEST, 4).pack() + _U32.pack(0)
        result = self.call(command, GET_REQUEST_SIZE + 4)
        reader = _Reader(result)
        reader.response_header()
        return reader.u32()

    def get_dns_suffix(self) -> str:
        result = self.call(_get_request(GET_PKI_FQDN_SUFFIX_REQUEST), GET_REQUEST_SIZE)
        reader = _Reader(result)
        reader.response_header()
        return reader.ansi_string().text()

    def enumerate_hash_handles(self) -> AMTHashHandles:
        result = self.call(_get_request(ENUMERATE_HASH_HANDLES_REQUEST), GET_REQUEST_SIZE)
        reader = _Reader(result)
        reader.response_header()
        length = reader.u32()
        handles = [reader.u32() for _ in range(CERT_HASH_MAX_NUMBER)]
        return AMTHashHandles(length, handles)

    def get_certificate_hashes(
        self, hash_handles: AMTHashHandles | None = None
    ) -> list[CertHashEntry]:
        """Fetch the certificate hashes, enumerating the handles when none are given."""
        if hash_handles is None or hash_handles.length == 0:
            hash_handles = self.enumerate_hash_handles()
        if hash_handles.length > CERT_HASH_MAX_NUMBER:
            raise PTHIError(
                f"hash handle count {hash_handles.length} exceeds {CERT_HASH_MAX_NUMBER}"
            )
        handles = list(hash_handles.handles)
        handles += [0] * (hash_handles.length - len(handles))

        entries = []
        for handle in handles[: hash_handles.length]:
            command = create_request_header(GET_CERTHASH_ENTRY_REQUEST, 4).pack() + _U32.pack(
                handle
            )
            reader = _Reader(self.call(command, 16))
            reader.response_header()
            entries.append(
                CertHashEntry(
                    is_default=reader.u32(),
                    is_active=reader.u32(),
                    certificate_hash=reader.take(CERT_HASH_MAX_LENGTH),
                    hash_algorithm=reader.u8(),
                    name=reader.ansi_string(),
                )
            )
        return entries

    def get_remote_access_connection_status(self) -> RemoteAccessConnectionStatus:
        result = self.call(
            _get_request(GET_REMOTE_ACCESS_CONNECTION_STATUS_REQUEST), GET_REQUEST_SIZE
        )
        reader = _Reader(result)
        return RemoteAccessConnectionStatus(
            header=reader.response_header(),
            network_status=reader.u32(),
            remote_status=reader.u32(),
            remote_trigger=reader.u32(),
            mps_hostname=reader.ansi_string(),
        )

    def get_lan_interface_settings(self, use_wireless: bool = False) -> LANInterfaceSettings:
        index = 1 if use_wireless else 0
        command = create_request_header(GET_LAN_INTERFACE_SETTINGS_REQUEST, 4).pack() + _U32.pack(
            index
        )
        reader = _Reader(self.call(command, 16))
        return LANInterfaceSettings(
            header=reader.response_header(),
            enabled=reader.u32(),
            ipv4_address=reader.u32(),
            dhcp_enabled=reader.u32(),
            dhcp_ip_mode=reader.u8(),
            link_status=reader.u8(),
            mac_address=reader.take(6),
        )

    def get_local_system_account(self) -> LocalSystemAccount:
        command = create_request_header(
            GET_LOCAL_SYSTEM_ACCOUNT_REQUEST, _LOCAL_SYSTEM_ACCOUNT_RESERVED
        ).pack() + bytes(_LOCAL_SYSTEM_ACCOUNT_RESERVED)
        reader = _Reader(self.call(command, 52))
        reader.response_header()
        username = reader.take(CFG_MAX_ACL_USER_LENGTH)
        secret = reader.take(CFG_MAX_ACL_PWD_LENGTH)
        return LocalSystemAccount(username, secret)