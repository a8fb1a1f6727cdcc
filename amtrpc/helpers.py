"""Human-readable interpretations of values reported by the management engine."""

_CONTROL_MODES = {
    0: "pre-provisioning state",
    1: "activated in client control mode",
    2: "activated in admin control mode",
}

_HASH_ALGORITHMS = {
    0: (16, "MD5"),
    1: (20, "SHA1"),
    2: (32, "SHA256"),
    3: (64, "SHA512"),
}

_NETWORK_CONNECTION_STATUS = {
    0: "direct",
    1: "vpn",
    2: "outside enterprise",
}

_REMOTE_ACCESS_CONNECTION_STATUS = {
    0: "not connected",
    1: "connecting",
    2: "connected",
}

_REMOTE_ACCESS_TRIGGER = {
    0: "user initiated",
    1: "alert",
    2: "periodic",
    3: "provisioning",
}


def interpret_control_mode(mode: int) -> str:
    """Describe an AMT control mode."""
    return _CONTROL_MODES.get(mode, "unknown state")


def interpret_hash_algorithm(hash_algorithm: int) -> tuple[int, str]:
    """Return the digest size in bytes and the name of a hash algorithm id."""
    return _HASH_ALGORITHMS.get(hash_algorithm, (0, "UNKNOWN"))


def interpret_amt_network_connection_status(status: int) -> str:
    """Describe the AMT network connection status."""
    return _NETWORK_CONNECTION_STATUS.get(status, "unknown")


def interpret_remote_access_connection_status(status: int) -> str:
    """Describe the remote access (CIRA) connection status."""
    return _REMOTE_ACCESS_CONNECTION_STATUS.get(status, "unknown")


def interpret_remote_access_trigger(status: int) -> str:
    """Describe what triggered a remote access connection."""
    return _REMOTE_ACCESS_TRIGGER.get(status, "unknown")