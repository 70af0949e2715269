#!/usr/bin/env python3
"""
Message emitter: writes ``count`` encoded records back to back over one
connected stream socket, as fast as the socket accepts them.
"""
import logging
import socket
import time
from dataclasses import dataclass

from .codec import Codec, get_codec
from .config import EmitterConfig
from .errors import TargetConnectionError, WriteError
from .record import DEFAULT_SOURCE, MessageRecord

logger = logging.getLogger()


@dataclass(frozen=True)
class EmitStats:
    messages: int
    bytes_sent: int
    elapsed: float

    @property
    def rate(self) -> float:
        """Messages per second."""
        return self.messages / self.elapsed if self.elapsed > 0 else 0.0

    @property
    def throughput(self) -> float:
        """MB per second."""
        if self.elapsed <= 0:
            return 0.0
        return self.bytes_sent / (1024 * 1024) / self.elapsed


def connect(host: str, port: "int | str", timeout: float | None = None) -> socket.socket:
    """Resolve ``host`` and open a TCP connection; ``port`` may be a service name."""
    if isinstance(port, str) and port.isascii() and port.isdigit():
        port = int(port)
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
    except (OSError, UnicodeError) as err:
        raise TargetConnectionError(host, port, str(err)) from err
    logger.debug(f"Connected to {host}:{port} from {sock.getsockname()}")
    return sock


def send_all(sock: socket.socket, data) -> int:
    """
    Write every byte of ``data``, calling send() again after partial writes.

    Returns the number of bytes written. A send() that raises or writes
    nothing raises WriteError; nothing is retried.
    """
    with memoryview(data) as view:
        total = view.nbytes
        sent = 0
        while sent < total:
            try:
                n = sock.send(view[sent:])
            except OSError as err:
                raise WriteError(f"Send failed after {sent} of {total} bytes: {err}") from err
            if n == 0:
                raise WriteError(f"Connection closed after {sent} of {total} bytes")
            sent += n
    return sent


class Emitter:
    """Encodes one record per iteration and writes it before building the next."""

    def __init__(self, sock: socket.socket, codec: Codec, source: str = DEFAULT_SOURCE):
        self.sock = sock
        self.codec = codec
        self.source = source

    def run(self, count: int) -> EmitStats:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")

        sock, codec, source = self.sock, self.codec, self.source
        build = MessageRecord.for_index
        bytes_sent = 0
        start_time = time.perf_counter()

        for i in range(count):
            try:
                bytes_sent += send_all(sock, codec.encode(build(i, source)))
            except WriteError as err:
                err.sent_messages = i
                raise
            finally:
                codec.reset()

        return EmitStats(messages=count, bytes_sent=bytes_sent,
                         elapsed=time.perf_counter() - start_time)


def emit(config: EmitterConfig, timeout: float | None = None) -> EmitStats:
    """Connect to the configured target, send ``config.count`` messages and close."""
    codec = get_codec(config.encoding)
    with connect(config.host, config.port, timeout=timeout) as sock:
        logger.info(f"Sending {config.count} {config.encoding.value} messages to {config.host}:{config.port}")
        stats = Emitter(sock, codec, config.source).run(config.count)

    logger.info(f"Sent {stats.messages} messages ({stats.bytes_sent} bytes) in {stats.elapsed:.3f} s")
    logger.info(f"Rate: {stats.rate:.0f} msg/s, throughput: {stats.throughput:.2f} MB/s")
    return stats
