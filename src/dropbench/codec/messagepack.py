#!/usr/bin/env python3
"""
MessagePack codec.

One record is one top-level map with four entries. Strings are encoded as
msgpack str (length prefixed UTF-8) and maps carry their entry count in the
header, so consecutive frames need no extra delimiter:

    84                      fixmap, 4 entries
    a2 69 64 2a             "id" -> 42
    a6 73 6f 75 72 63 65 .. "source" -> str
    a6 70 61 72 65 6e 74 81 "parent" -> fixmap, 1 entry
    ...
"""
import msgpack

from ..errors import DecodeError
from ..record import MessageRecord
from .base import Codec, Decoder


class MessagePackDecoder(Decoder):

    def __init__(self):
        self._unpacker = msgpack.Unpacker(raw=False)
        self._fed = 0
        self._consumed = 0

    def feed(self, data: bytes) -> None:
        self._unpacker.feed(data)
        self._fed += len(data)

    def __iter__(self):
        try:
            for obj in self._unpacker:
                # tell() also advances inside a partially received map
                self._consumed = self._unpacker.tell()
                yield obj
        except ValueError as err:
            raise DecodeError(f"Malformed msgpack data after byte {self._consumed}: {err}") from err

    @property
    def pending(self) -> int:
        return self._fed - self._consumed


class MessagePackCodec(Codec):
    """Packs records with a single msgpack.Packer whose buffer is reused across frames."""

    def __init__(self):
        self._packer = msgpack.Packer(autoreset=False, use_bin_type=True)

    def encode(self, record: MessageRecord) -> bytes:
        self._packer.pack(record.as_dict())
        return self._packer.bytes()

    def reset(self) -> None:
        self._packer.reset()

    def decoder(self) -> MessagePackDecoder:
        return MessagePackDecoder()
