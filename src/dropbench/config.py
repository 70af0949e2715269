import re
from dataclasses import dataclass

from .codec import Encoding
from .errors import ArgumentParseError
from .record import DEFAULT_SOURCE

DEFAULT_COUNT = 1

_DECIMAL = re.compile(r"[0-9]+")


def parse_count(value: "str | int | None") -> int:
    """Parse COUNT: a non-negative decimal integer, 1 when omitted."""
    if value is None:
        return DEFAULT_COUNT
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ArgumentParseError(f"COUNT must be >= 0, got {value}")
        return value
    if not isinstance(value, str) or not _DECIMAL.fullmatch(value):
        raise ArgumentParseError(f"COUNT must be a non-negative decimal integer, got {value!r}")
    return int(value)


def parse_port(value: "str | int") -> "int | str":
    """Numeric ports become ints (1-65535); anything else is kept as a service name."""
    if isinstance(value, str) and not _DECIMAL.fullmatch(value):
        if not value:
            raise ArgumentParseError("PORT must not be empty")
        return value
    port = int(value)
    if not 0 < port < 65536:
        raise ArgumentParseError(f"PORT must be between 1 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class EmitterConfig:
    """Everything a run needs, fixed before the connection is opened."""
    host: str
    port: "int | str"
    count: int = DEFAULT_COUNT
    encoding: Encoding = Encoding.MSGPACK
    source: str = DEFAULT_SOURCE

    @classmethod
    def from_args(cls, args) -> "EmitterConfig":
        try:
            encoding = Encoding.from_name(args.encoding)
        except ValueError as err:
            raise ArgumentParseError(str(err)) from err
        return cls(
            host=args.host,
            port=parse_port(args.port),
            count=parse_count(args.count),
            encoding=encoding,
            source=args.source,
        )
