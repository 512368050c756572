from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "BlockKind",
    "Block",
]


class BlockKind(Enum):
    HEADING = "heading"
    BODY = "body"


@dataclass(frozen=True)
class Block:
    """One unit of document content."""
    kind: BlockKind
    text: str

    @classmethod
    def heading(cls, text: str) -> Block:
        return cls(BlockKind.HEADING, text)

    @classmethod
    def body(cls, text: str) -> Block:
        return cls(BlockKind.BODY, text)
