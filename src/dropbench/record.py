#!/usr/bin/env python3
"""
Message record emitted by the load generator.

Every record has the same shape; only ``message`` changes between
iterations:

    {"id": 42, "source": "service", "parent": {"child": "item"}, "message": "le message - <i>"}
"""
from dataclasses import dataclass, field
from typing import Any

RECORD_ID = 42
DEFAULT_SOURCE = "service"
PARENT_CHILD = "item"
MESSAGE_PREFIX = "le message - "

FIELD_ORDER = ("id", "source", "parent", "message")


@dataclass(frozen=True)
class Parent:
    child: str = PARENT_CHILD

    def as_dict(self) -> dict[str, str]:
        return {"child": self.child}


@dataclass(frozen=True)
class MessageRecord:
    message: str
    source: str = DEFAULT_SOURCE
    id: int = RECORD_ID
    parent: Parent = field(default_factory=Parent)

    @classmethod
    def for_index(cls, index: int, source: str = DEFAULT_SOURCE) -> "MessageRecord":
        """Build the record sent in iteration ``index`` (zero based)."""
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")
        return cls(message=f"{MESSAGE_PREFIX}{index}", source=source)

    def as_dict(self) -> dict[str, Any]:
        # insertion order is the wire order
        return {
            "id": self.id,
            "source": self.source,
            "parent": self.parent.as_dict(),
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MessageRecord":
        """
        Rebuild a record from a decoded map.

        Raises ValueError unless ``data`` has exactly the four record keys
        and a ``parent`` map holding only ``child``.
        """
        if not isinstance(data, dict):
            raise ValueError(f"record must be a map, got {type(data).__name__}")
        if set(data) != set(FIELD_ORDER) or len(data) != len(FIELD_ORDER):
            raise ValueError(f"unexpected record keys {sorted(data)}")

        rid, source, parent, message = (data[k] for k in FIELD_ORDER)
        if not isinstance(rid, int) or isinstance(rid, bool):
            raise ValueError(f"id must be an integer, got {rid!r}")
        if not isinstance(source, str) or not isinstance(message, str):
            raise ValueError("source and message must be strings")
        if not isinstance(parent, dict) or list(parent) != ["child"]:
            raise ValueError(f"parent must be a map with a single 'child' key, got {parent!r}")
        if not isinstance(parent["child"], str):
            raise ValueError("parent.child must be a string")

        return cls(message=message, source=source, id=rid, parent=Parent(parent["child"]))

    def __repr__(self):
        return f"MessageRecord(id={self.id}, source={self.source!r}, child={self.parent.child!r}, message={self.message!r})"
