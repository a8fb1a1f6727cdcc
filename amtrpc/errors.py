"""Error type carrying a numeric code alongside its message."""


class CustomError(Exception):
    """An error identified by an integer code and a human-readable message."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"Error {self.code}: {self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CustomError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))