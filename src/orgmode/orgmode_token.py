"""Token types and token representation for Org documents."""

from dataclasses import dataclass
from enum import Enum


class OrgTokenType(Enum):
    """Token types produced by the Org tokenizer."""
    EOF = "EOF"
    NEWLINE = "NEWLINE"
    HEADING = "HEADING"
    KEYWORD = "KEYWORD"
    BLOCK_BEGIN = "BLOCK_BEGIN"
    BLOCK_END = "BLOCK_END"
    DRAWER_BEGIN = "DRAWER_BEGIN"
    DRAWER_END = "DRAWER_END"
    LIST_ITEM = "LIST_ITEM"
    TABLE_ROW = "TABLE_ROW"
    TABLE_SEPARATOR = "TABLE_SEPARATOR"
    COMMENT = "COMMENT"
    TEXT = "TEXT"
    INVALID = "INVALID"


@dataclass
class OrgToken:
    """
    Represents a single token in an Org document.

    Attributes:
        type: The type of the token
        literal: The slice of the source line covered by the token
        line: 1-based line number
        column: 1-based column number
    """
    type: OrgTokenType
    literal: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"OrgToken({self.type.name}, {self.literal!r}, line={self.line}, col={self.column})"
