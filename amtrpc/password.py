"""Reading passwords from the user."""

from __future__ import annotations

import getpass
import sys
from abc import ABC, abstractmethod
from typing import TextIO

TEST_PASSWORD = "password"


class PasswordReader(ABC):
    """Something that can obtain a password."""

    @abstractmethod
    def read_password(self) -> str:
        """Return a password."""


class TerminalPasswordReader(PasswordReader):
    """Reads a password without echo from a terminal, or a line from a pipe."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def read_password(self) -> str:
        stream = self.stream if self.stream is not None else sys.stdin
        if stream.isatty():
            return getpass.getpass(prompt="")
        line = stream.readline()
        if not line.endswith("\n"):
            raise EOFError("end of input before a complete line was read")
        return line