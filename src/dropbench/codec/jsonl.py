#!/usr/bin/env python3
import json

from ..errors import DecodeError
from ..record import MessageRecord
from .base import Codec, Decoder


class JsonLinesDecoder(Decoder):

    def __init__(self):
        self._buffer = bytearray()

    def feed(self, data: bytes) -> None:
        self._buffer += data

    def __iter__(self):
        while True:
            end = self._buffer.find(b"\n")
            if end < 0:
                return
            line = bytes(self._buffer[:end])
            del self._buffer[:end + 1]
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except ValueError as err:
                raise DecodeError(f"Malformed JSON line {line[:64]!r}: {err}") from err

    @property
    def pending(self) -> int:
        return len(self._buffer)


class JsonLinesCodec(Codec):
    """
    Alternate plain text encoding: one compact JSON object per line, keys in
    record order.
    """

    def __init__(self):
        self._encoder = json.JSONEncoder(separators=(",", ":"), ensure_ascii=False)
        self._buffer = bytearray()

    def encode(self, record: MessageRecord) -> bytearray:
        self._buffer += self._encoder.encode(record.as_dict()).encode("utf-8")
        self._buffer += b"\n"
        return self._buffer

    def reset(self) -> None:
        self._buffer.clear()

    def decoder(self) -> JsonLinesDecoder:
        return JsonLinesDecoder()
