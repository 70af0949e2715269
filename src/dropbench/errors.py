class DropbenchError(Exception):
    """Base class for all dropbench errors"""


class UsageError(DropbenchError):
    """Wrong number of positional arguments or an unknown option."""


class ArgumentParseError(DropbenchError):
    """An argument is present but its value cannot be parsed."""


class TargetConnectionError(DropbenchError):
    """Resolving or connecting to the target failed."""

    def __init__(self, host, port, reason: str):
        super().__init__(f"cannot connect to {host}:{port}: {reason}")
        self.host = host
        self.port = port


class WriteError(DropbenchError):
    """A write to the target stream failed mid-run."""

    def __init__(self, message: str, sent_messages: int = 0):
        super().__init__(message)
        self.sent_messages = sent_messages


class DecodeError(DropbenchError):
    """The receiving side got bytes that do not decode with the active codec."""
