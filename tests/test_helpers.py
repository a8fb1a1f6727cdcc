import pytest

from amtrpc.helpers import (
    interpret_amt_network_connection_status,
    interpret_control_mode,
    interpret_hash_algorithm,
    interpret_remote_access_connection_status,
    interpret_remote_access_trigger,
)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (0, "pre-provisioning state"),
        (1, "activated in client control mode"),
        (2, "activated in admin control mode"),
        (3, "unknown state"),
    ],
)
def test_interpret_control_mode(mode, expected):
    assert interpret_control_mode(mode) == expected


@pytest.mark.parametrize(
    "algorithm_id, size, name",
    [
        (0, 16, "MD5"),
        (1, 20, "SHA1"),
        (2, 32, "SHA256"),
        (3, 64, "SHA512"),
        (4, 0, "UNKNOWN"),
    ],
)
def test_interpret_hash_algorithm(algorithm_id, size, name):
    hash_size, algorithm = interpret_hash_algorithm(algorithm_id)
    assert algorithm == name
    assert hash_size == size


@pytest.mark.parametrize(
    "status, expected",
    [
        (0, "user initiated"),
        (1, "alert"),
        (2, "periodic"),
        (3, "provisioning"),
        (4, "unknown"),
    ],
)
def test_interpret_remote_access_trigger(status, expected):
    assert interpret_remote_access_trigger(status) == expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (0, "direct"),
        (1, "vpn"),
        (2, "outside enterprise"),
        (3, "unknown"),
    ],
)
def test_interpret_amt_network_connection_status(status, expected):
    assert interpret_amt_network_connection_status(status) == expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (0, "not connected"),
        (1, "connecting"),
        (2, "connected"),
        (3, "unknown"),
    ],
)
def test_interpret_remote_access_connection_status(status, expected):
    assert interpret_remote_access_connection_status(status) == expected