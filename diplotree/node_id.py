"""Node identifiers and their LEB128 encoding."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import TreeDBError


@dataclass(frozen=True, order=True)
class NodeID:
    """Identifier of a node; the value 0 is the null identifier."""

    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"node id must not be negative: {self.value}")

    def is_null(self) -> bool:
        """Return True for the null identifier."""
        return self.value == 0

    def __int__(self) -> int:
        return self.value

    def to_bytes(self) -> bytes:
        """Encode the identifier as unsigned LEB128."""
        out = bytearray()
        remaining = self.value
        while True:
            byte = remaining & 0x7F
            remaining >>= 7
            if remaining:
                out.append(byte | 0x80)
            else:
                out.append(byte)
                return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> NodeID:
        """Decode an identifier from exactly one unsigned LEB128 number."""
        result = 0
        shift = 0
        for position, byte in enumerate(data):
            result |= (byte & 0x7F) << shift
            shift += 7
            if not byte & 0x80:
                if position != len(data) - 1:
                    raise TreeDBError("Trailing bytes after node id")
                return cls(result)
        raise TreeDBError("Truncated node id")