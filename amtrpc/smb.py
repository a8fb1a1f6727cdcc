"""Parsing of smb:// locations for remote configuration files."""

from __future__ import annotations

import getpass
import logging
import os
from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit

from amtrpc.password import PasswordReader

log = logging.getLogger(__name__)

DEFAULT_PORT = "445"
_PROMPT_MARKER = "*"
_SECRET_ENV = "SMB_PASSWORD"


@dataclass
class SmbProperties:
    """The parts of an smb:// URL needed to reach a file on a share."""

    url: str = ""
    host: str = ""
    port: str = ""
    user: str = ""
    password: str = field(default_factory=str)
    domain: str = ""
    share_name: str = ""
    file_path: str = ""


def _split_host_port(hostport: str) -> tuple[str, str]:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in host: {hostport!r}")
        host, rest = hostport[1:end], hostport[end + 1 :]
        if rest and not rest.startswith(":"):
            raise ValueError(f"invalid port {rest!r} after host")
        port = rest[1:]
    else:
        host, _, port = hostport.rpartition(":") if ":" in hostport else (hostport, "", "")
    if port and not port.isdigit():
        raise ValueError(f"invalid port {':' + port!r} after host")
    return unquote(host), port


class SambaService:
    """Resolves smb:// URLs into connection properties."""

    def __init__(self, password_reader: PasswordReader) -> None:
        self.password_reader = password_reader

    def parse_url(self, url: str) -> SmbProperties:
        """Parse ``smb://[[domain;]user[:password]@]server[:port]/share/path``."""
        props = SmbProperties(url=url)
        parts = urlsplit(url)
        if parts.scheme != "smb":
            raise ValueError("invalid scheme")

        userinfo, has_userinfo, hostport = parts.netloc.rpartition("@")
        props.host, props.port = _split_host_port(hostport)
        if not props.host:
            raise ValueError("missing hostname")
        if not props.port:
            props.port = DEFAULT_PORT

        path = unquote(parts.path)
        segments = path.strip("/").split("/")
        if len(segments) < 2:
            raise ValueError(
                "invalid path spec, expecting shareName and filePath to be included: " + path
            )
        props.share_name = segments[0]
        props.file_path = "/".join(segments[1:])

        credentials = userinfo.partition(":") if has_userinfo else ("", "", "")
        username = unquote(credentials[0])
        secret = unquote(credentials[2])

        # a domain may precede the user name, separated by a semicolon
        user_parts = username.split(";")
        if len(user_parts) == 1:
            props.user = user_parts[0]
        elif len(user_parts) == 2:
            props.domain, props.user = user_parts

        if not props.domain:
            props.domain = os.environ.get("SMB_DOMAIN", "")
        if not props.user:
            props.user = os.environ.get("SMB_USER", "")
        if not props.user:
            props.user = getpass.getuser()
        if props.user == "root":
            sudo_user = os.environ.get("SUDO_USER", "")
            if sudo_user:
                props.user = sudo_user

        props.password = secret
        if secret == _PROMPT_MARKER:
            print("Please enter smb password: ")
            props.password = self.password_reader.read_password()
        if not props.password:
            props.password = os.environ.get(_SECRET_ENV, props.password)

        return props