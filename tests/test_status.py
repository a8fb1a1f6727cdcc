import pytest

from amtrpc.status import Status, status_name


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Status.SUCCESS, "AMT_STATUS_SUCCESS"),
        (Status.INTERNAL_ERROR, "AMT_STATUS_INTERNAL_ERROR"),
        (Status.NOT_READY, "AMT_STATUS_NOT_READY"),
        (Status.INVALID_AMT_MODE, "AMT_STATUS_INVALID_AMT_MODE"),
        (Status.INVALID_MESSAGE_LENGTH, "AMT_STATUS_INVALID_MESSAGE_LENGTH"),
        (Status.NOT_PERMITTED, "AMT_STATUS_NOT_PERMITTED"),
        (Status.MAX_LIMIT_REACHED, "AMT_STATUS_MAX_LIMIT_REACHED"),
        (Status.INVALID_PARAMETER, "AMT_STATUS_INVALID_PARAMETER"),
        (Status.RNG_GENERATION_IN_PROGRESS, "AMT_STATUS_RNG_GENERATION_IN_PROGRESS"),
        (Status.RNG_NOT_READY, "AMT_STATUS_RNG_NOT_READY"),
        (Status.CERTIFICATE_NOT_READY, "AMT_STATUS_CERTIFICATE_NOT_READY"),
        (Status.INVALID_HANDLE, "AMT_STATUS_INVALID_HANDLE"),
        (Status.NOT_FOUND, "AMT_STATUS_NOT_FOUND"),
        (100, "AMT_STATUS_UNKNOWN"),
    ],
)
def test_status_name(value, expected):
    assert status_name(value) == expected


def test_str_of_member():
    member = Status(3)
    assert str(member) == "AMT_STATUS_INVALID_AMT_MODE"


def test_numeric_values():
    assert Status.INVALID_HANDLE == 2053
    assert Status.NOT_FOUND == 2068
    assert Status(3) is Status.INVALID_AMT_MODE


def test_plain_int_lookup():
    assert status_name(16) == "AMT_STATUS_NOT_PERMITTED"