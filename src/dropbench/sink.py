#!/usr/bin/env python3
"""
Receiving side of the benchmark.

Accepts one connection, splits the byte stream into frames with the
active codec's decoder and counts what arrives. Like the collector the
generator is meant to load, records without a ``message`` field are
dropped with a warning.
"""
import logging
import socket
import time
from dataclasses import dataclass
from typing import Any

from .codec import Codec
from .errors import DecodeError

logger = logging.getLogger()

DEFAULT_PORT = 10053


@dataclass
class SinkStats:
    records: int = 0
    dropped: int = 0
    bytes_received: int = 0
    elapsed: float = 0.0

    @property
    def rate(self) -> float:
        return self.records / self.elapsed if self.elapsed > 0 else 0.0


def listen(host: str = "127.0.0.1", port: int = DEFAULT_PORT, backlog: int = 1) -> socket.socket:
    """Return a bound, listening TCP socket. Port 0 picks a free port."""
    sock = socket.create_server((host, port), backlog=backlog)
    logger.info(f"Listening on {host}:{sock.getsockname()[1]}")
    return sock


class Sink:

    def __init__(self, codec: Codec, require_message: bool = True, keep: bool = False,
                 buffer_size: int = 65536):
        self.codec = codec
        self.require_message = require_message
        self.keep = keep
        self.buffer_size = buffer_size
        self.records: list[Any] = []

    def serve_one(self, listener: socket.socket) -> SinkStats:
        """Accept a single connection on ``listener`` and consume it until EOF."""
        conn, addr = listener.accept()
        logger.info(f"Connection from {addr}")
        with conn:
            return self.consume(conn)

    def consume(self, conn: socket.socket) -> SinkStats:
        decoder = self.codec.decoder()
        stats = SinkStats()
        start_time = time.perf_counter()

        while True:
            data = conn.recv(self.buffer_size)
            if not data:
                break
            stats.bytes_received += len(data)
            decoder.feed(data)
            for obj in decoder:
                self._accept(obj, stats)

        stats.elapsed = time.perf_counter() - start_time
        if decoder.pending:
            raise DecodeError(f"Connection closed inside a frame, {decoder.pending} bytes left over")

        logger.info(f"Received {stats.records} records ({stats.bytes_received} bytes, "
                    f"{stats.dropped} dropped) in {stats.elapsed:.3f} s")
        return stats

    def _accept(self, obj: Any, stats: SinkStats) -> None:
        if self.require_message and not (isinstance(obj, dict) and "message" in obj):
            logger.warning(f"Dropping {obj!r}: message field required")
            stats.dropped += 1
            return
        stats.records += 1
        if self.keep:
            self.records.append(obj)
