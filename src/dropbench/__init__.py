#!/usr/bin/env python3
"""
dropbench: load generator for message collectors.

Opens one TCP connection and writes a fixed-shape record, encoded as
MessagePack (or JSON lines), as many times as requested.
"""

from .codec import Codec, Decoder, Encoding, get_codec
from .config import EmitterConfig, parse_count, parse_port
from .emitter import EmitStats, Emitter, connect, emit, send_all
from .errors import (
    ArgumentParseError,
    DecodeError,
    DropbenchError,
    TargetConnectionError,
    UsageError,
    WriteError,
)
from .record import MessageRecord, Parent
from .sink import Sink, SinkStats, listen

__version__ = "0.1.0"

__all__ = [
    # Record
    "MessageRecord",
    "Parent",

    # Codecs
    "Codec",
    "Decoder",
    "Encoding",
    "get_codec",

    # Emitter
    "EmitterConfig",
    "EmitStats",
    "Emitter",
    "connect",
    "emit",
    "send_all",
    "parse_count",
    "parse_port",

    # Sink
    "Sink",
    "SinkStats",
    "listen",

    # Errors
    "DropbenchError",
    "UsageError",
    "ArgumentParseError",
    "TargetConnectionError",
    "WriteError",
    "DecodeError",
]
