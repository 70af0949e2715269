from enum import Enum


class Encoding(Enum):
    MSGPACK = "msgpack"  # concatenated MessagePack maps, primary wire format
    JSON    = "json"     # one compact JSON object per line

    @classmethod
    def from_name(cls, name: "str | Encoding") -> "Encoding":
        if isinstance(name, cls):
            return name
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(e.value for e in cls)
            raise ValueError(f"Unknown encoding {name!r} (choose from {choices})") from None
