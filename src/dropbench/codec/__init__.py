#!/usr/bin/env python3
"""
dropbench wire encodings.

The encoding is picked once, before an emitter is built, through
get_codec(); the per-message path never branches on it.
"""

from .base import Codec, Decoder
from .ids import Encoding

from .messagepack import MessagePackCodec, MessagePackDecoder
from .jsonl import JsonLinesCodec, JsonLinesDecoder

__all__ = [
    "Codec",
    "Decoder",
    "Encoding",
    "MessagePackCodec",
    "MessagePackDecoder",
    "JsonLinesCodec",
    "JsonLinesDecoder",
    "get_codec",
]

_CODEC_CLASSES = [
    (Encoding.MSGPACK, MessagePackCodec),
    (Encoding.JSON, JsonLinesCodec),
]

for encoding, codec_class in _CODEC_CLASSES:
    codec_class.register(encoding)


def get_codec(encoding: "Encoding | str" = Encoding.MSGPACK) -> Codec:
    """Return a fresh codec instance for ``encoding`` (enum member or name)."""
    encoding = Encoding.from_name(encoding)
    cls = Codec.get_class_for_encoding(encoding)
    if cls is None:
        raise ValueError(f"No codec registered for {encoding}")
    return cls()
