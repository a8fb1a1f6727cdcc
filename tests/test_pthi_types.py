import pytest

from amtrpc.pthi_types import (
    ANSI_STRING_LEN,
    GET_REQUEST_SIZE,
    GET_UUID_REQUEST,
    AMTANSIString,
    AMTOperationalState,
    MessageHeader,
    ResponseMessageHeader,
)
from amtrpc.status import Status


def test_operational_state_strings():
    assert str(AMTOperationalState(0)) == "disabled"
    assert str(AMTOperationalState(1)) == "enabled"


def test_message_header_size_matches_request_size():
    assert len(MessageHeader(1, 1, 0, GET_UUID_REQUEST, 0).pack()) == GET_REQUEST_SIZE


def test_message_header_wire_bytes():
    packed = MessageHeader(1, 1, 0, GET_UUID_REQUEST, 0).pack()
    assert packed == b"\x01\x01\x00\x00\x5c\x00\x00\x04\x00\x00\x00\x00"


def test_message_header_round_trip():
    header = MessageHeader(1, 1, 0, GET_UUID_REQUEST, 40)
    assert MessageHeader.unpack(header.pack()) == header


def test_message_header_unpack_ignores_trailing_bytes():
    header = MessageHeader(1, 1, 0, GET_UUID_REQUEST, 4)
    assert MessageHeader.unpack(header.pack() + b"\xff" * 8) == header


def test_message_header_unpack_short_data():
    with pytest.raises(ValueError):
        MessageHeader.unpack(b"\x01\x01")


def test_message_header_out_of_range():
    with pytest.raises(ValueError):
        MessageHeader(major_version=256).pack()


def test_response_header_round_trip():
    response = ResponseMessageHeader(
        MessageHeader(1, 1, 0, GET_UUID_REQUEST, 16), Status.INVALID_AMT_MODE
    )
    decoded = ResponseMessageHeader.unpack(response.pack())
    assert decoded == response
    assert decoded.status == Status.INVALID_AMT_MODE


def test_response_header_is_request_header_plus_status():
    header = MessageHeader(1, 1, 0, GET_UUID_REQUEST, 0)
    packed = ResponseMessageHeader(header, 1).pack()
    assert packed.startswith(header.pack())
    assert len(packed) == GET_REQUEST_SIZE + 4


def test_response_header_unpack_short_data():
    with pytest.raises(ValueError):
        ResponseMessageHeader.unpack(bytes(GET_REQUEST_SIZE))


def test_ansi_string_text():
    value = AMTANSIString(4, bytes([1, 2, 3, 4]))
    assert value.text() == "\x01\x02\x03\x04"


def test_ansi_string_empty_text():
    assert AMTANSIString(0, b"abc").text() == ""


def test_ansi_string_round_trip():
    value = AMTANSIString(11, b"example.com")
    decoded = AMTANSIString.unpack(value.pack())
    assert decoded.length == 11
    assert decoded.text() == "example.com"
    assert len(decoded.buffer) == ANSI_STRING_LEN


def test_ansi_string_pack_pads_buffer():
    packed = AMTANSIString(3, b"abc").pack()
    assert len(packed) == ANSI_STRING_LEN + 2
    assert packed[2:5] == b"abc"
    assert set(packed[5:]) == {0}


def test_ansi_string_buffer_too_long():
    with pytest.raises(ValueError):
        AMTANSIString(1, bytes(ANSI_STRING_LEN + 1))


def test_ansi_string_unpack_short_data():
    with pytest.raises(ValueError):
        AMTANSIString.unpack(b"\x04\x00abcd")


def test_ansi_string_negative_length():
    with pytest.raises(ValueError):
        AMTANSIString(-1, b"").pack()