from typing import Any, Iterator

from ..errors import DecodeError
from ..record import MessageRecord
from .ids import Encoding


class Decoder:
    """
    Streaming decoder. Feed raw bytes as they arrive from the socket and
    iterate to get every complete object decoded so far. Bytes of an
    unfinished frame stay buffered until the next feed().
    """

    def feed(self, data: bytes) -> None:
        raise NotImplementedError("Subclasses must implement feed()")

    def __iter__(self) -> Iterator[Any]:
        raise NotImplementedError("Subclasses must implement __iter__()")

    @property
    def pending(self) -> int:
        """Number of buffered bytes that do not form a complete frame yet."""
        raise NotImplementedError("Subclasses must implement pending")


class Codec:
    """Base class for all wire encodings"""
    encoding: Encoding
    registry: dict[Encoding, Any] = {}

    @classmethod
    def register(cls, encoding: Encoding):
        if encoding in cls.registry:
            raise ValueError(f"Duplicate encoding {encoding} for {cls.__name__}")
        cls.registry[encoding] = cls
        cls.encoding = encoding
        return cls

    @classmethod
    def get_class_for_encoding(cls, encoding: Encoding) -> Any:
        return cls.registry.get(encoding)

    def encode(self, record: MessageRecord):
        """
        Serialize ``record`` into the codec's reusable buffer and return the
        complete frame as a bytes-like object. The result is only valid until
        the next reset().
        """
        raise NotImplementedError("Subclasses must implement encode()")

    def reset(self) -> None:
        raise NotImplementedError("Subclasses must implement reset()")

    def decoder(self) -> Decoder:
        raise NotImplementedError("Subclasses must implement decoder()")

    def pack(self, record: MessageRecord) -> bytes:
        """One-shot encode, independent of the reusable buffer."""
        try:
            return bytes(self.encode(record))
        finally:
            self.reset()

    def decode_all(self, data: bytes) -> list[Any]:
        """Decode every frame in ``data``; a trailing partial frame is an error."""
        decoder = self.decoder()
        decoder.feed(data)
        objects = list(decoder)
        if decoder.pending:
            raise DecodeError(f"{decoder.pending} trailing bytes do not form a complete {self.encoding.value} frame")
        return objects

    def __repr__(self):
        return f"<{self.__class__.__name__} encoding={self.encoding.value}>"
