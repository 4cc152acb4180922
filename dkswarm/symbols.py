"""Parsed-symbol data model shared by the call graph, partitioner and replacer."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from pathlib import Path


class SymbolKind(str, enum.Enum):
    """Kind of a source symbol; its string form is the lower-case name."""

    FUNCTION = "function"
    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    TRAIT = "trait"
    IMPL = "impl"
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    CONST = "const"
    STATIC = "static"
    MODULE = "module"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Span:
    """Half-open byte range `[start_byte, end_byte)` of a symbol in its file."""

    start_byte: int
    end_byte: int


@dataclass(frozen=True)
class Symbol:
    """A named definition found in a source file."""

    name: str
    qualified_name: str
    kind: SymbolKind
    file_path: Path
    span: Span
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_path", Path(self.file_path))
        object.__setattr__(self, "kind", SymbolKind(self.kind))


@dataclass(frozen=True)
class RawCallEdge:
    """An unresolved call from one named symbol to another."""

    caller_name: str
    callee_name: str
    file_path: Path | None = None

    def __post_init__(self) -> None:
        if self.file_path is not None:
            object.__setattr__(self, "file_path", Path(self.file_path))